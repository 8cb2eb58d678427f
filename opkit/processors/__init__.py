"""
Token processors for Opkit.

Each processor is a pure function over a single token (or, for comma
normalization, a single character). The batch module applies them across a
whole blob.
"""

from .commas import normalize_comma
from .numeric import (
    Converted,
    EncodingProfile,
    NumericCodec,
    Passthrough,
    PROFILES,
    decode_token,
    encode_token,
)
from .quotes import add_quotes, strip_quotes

__all__ = [
    'Converted',
    'EncodingProfile',
    'NumericCodec',
    'Passthrough',
    'PROFILES',
    'add_quotes',
    'decode_token',
    'encode_token',
    'normalize_comma',
    'strip_quotes',
]
