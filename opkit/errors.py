"""
Exception types for Opkit.

Transforms never raise on user data; these are only raised while the
engine is being configured at startup.
"""


class OpkitError(Exception):
    """Base class for all Opkit errors."""


class ConfigError(OpkitError):
    """Raised for invalid settings such as a non-positive page size."""


class EncodingSetupError(ConfigError):
    """Raised when the numeric codec cannot be built from a profile."""
