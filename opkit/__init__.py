"""
Opkit - an operations toolbox for large pasted id lists.

This package splits comma- or newline-separated lists into tokens, applies
reversible per-token transforms (numeric id obfuscation, quoting, comma
normalization, format flipping) in bounded chunks, and pages very large
results through a thread-safe session.
"""

__version__ = "1.0.0"

from .context import Buffer, PageView, Settings, TransformKind
from .session import Session

__all__ = ['Buffer', 'PageView', 'Session', 'Settings', 'TransformKind', '__version__']
