"""
Reversible numeric encoding processor for Opkit.

Integer tokens are turned into short salted Hashids strings and back. This
is obfuscation for ids that should not be readable at a glance, not
encryption. Anything that is not an integer (or not a valid encoding) is
passed through untouched.
"""

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Dict, Optional, Union

from hashids import Hashids

from ..errors import ConfigError, EncodingSetupError

if TYPE_CHECKING:
    from ..context import Settings


INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ1234567890"

# Separators and quotes the tokenizer acts on; barred from alphabets and prefixes
RESERVED_CHARACTERS = ",\n'"


@dataclass(frozen=True)
class EncodingProfile:
    """Salt, padding and alphabet that together define one encoding."""
    name: str
    salt: str
    min_length: int
    alphabet: str = DEFAULT_ALPHABET
    prefix: str = ""


PROFILES: Dict[str, EncodingProfile] = {
    'general': EncodingProfile(name='general', salt='Tongyong', min_length=12),
    'huawei': EncodingProfile(
        name='huawei',
        salt='Huawei',
        min_length=16,
        alphabet='abcdefghijklmnopqrstuvwxyz1234567890',
        prefix='haot',
    ),
}


@dataclass(frozen=True)
class Converted:
    value: str


@dataclass(frozen=True)
class Passthrough:
    original: str


Outcome = Union[Converted, Passthrough]


def collapse(outcome: Outcome) -> str:
    """Reduce an outcome to the text shown to the user."""
    if isinstance(outcome, Converted):
        return outcome.value
    return outcome.original


class NumericCodec:
    """
    Encodes integer tokens with Hashids under a fixed profile.

    A codec is built once at startup; encode and decode never raise.
    """

    def __init__(self, profile: EncodingProfile):
        self.profile = profile
        try:
            self._hashids = Hashids(
                salt=profile.salt,
                min_length=profile.min_length,
                alphabet=profile.alphabet,
            )
        except ValueError as e:
            raise EncodingSetupError(f"Invalid encoding profile '{profile.name}': {e}") from e

    @classmethod
    def from_settings(cls, settings: 'Settings') -> 'NumericCodec':
        """Build the codec for the configured profile and overrides."""
        return cls(resolve_profile(settings))

    def try_encode(self, token: str) -> Outcome:
        if not INTEGER_PATTERN.fullmatch(token):
            return Passthrough(token)
        # Hashids only encodes non-negative integers and returns '' otherwise
        encoded = self._hashids.encode(int(token))
        if not encoded:
            return Passthrough(token)
        return Converted(self.profile.prefix + encoded)

    def try_decode(self, token: str) -> Outcome:
        candidate = token
        prefix = self.profile.prefix
        if prefix and candidate.startswith(prefix):
            candidate = candidate[len(prefix):]
        if not candidate:
            return Passthrough(token)
        numbers = self._hashids.decode(candidate)
        if not numbers:
            return Passthrough(token)
        return Converted(str(numbers[0]))

    def encode(self, token: str) -> str:
        return collapse(self.try_encode(token))

    def decode(self, token: str) -> str:
        return collapse(self.try_decode(token))


def resolve_profile(settings: 'Settings') -> EncodingProfile:
    """
    Look up the named profile and apply any per-field overrides.

    Args:
        settings: Settings carrying the profile name and optional overrides

    Returns:
        The effective EncodingProfile

    Raises:
        ConfigError: if the profile name is unknown, min length is negative, or
            the alphabet or prefix contains a separator, quote or whitespace
    """
    profile = PROFILES.get(settings.encoding_profile)
    if profile is None:
        known = ", ".join(sorted(PROFILES))
        raise ConfigError(f"Unknown encoding profile '{settings.encoding_profile}' (known: {known})")

    overrides = {}
    if settings.encoding_salt is not None:
        overrides['salt'] = settings.encoding_salt
    if settings.encoding_min_length is not None:
        if settings.encoding_min_length < 0:
            raise ConfigError(f"encoding_min_length must not be negative, got {settings.encoding_min_length}")
        overrides['min_length'] = settings.encoding_min_length
    if settings.encoding_alphabet is not None:
        overrides['alphabet'] = settings.encoding_alphabet
    if settings.encoding_prefix is not None:
        overrides['prefix'] = settings.encoding_prefix
    for field_name in ('alphabet', 'prefix'):
        value = overrides.get(field_name)
        if value is not None and _has_reserved(value):
            raise ConfigError(f"encoding_{field_name} must not contain commas, quotes or whitespace, got {value!r}")
    return replace(profile, **overrides)


def _has_reserved(text: str) -> bool:
    return any(ch in RESERVED_CHARACTERS or ch.isspace() for ch in text)


def encode_token(token: str, codec: Optional[NumericCodec] = None) -> str:
    """Encode an integer token; other tokens come back unchanged."""
    return (codec or default_codec()).encode(token)


def decode_token(token: str, codec: Optional[NumericCodec] = None) -> str:
    """Decode a token produced by encode_token; anything else comes back unchanged."""
    return (codec or default_codec()).decode(token)


_DEFAULT_CODEC = NumericCodec(PROFILES['general'])


def default_codec() -> NumericCodec:
    """Codec for the built-in 'general' profile."""
    return _DEFAULT_CODEC
