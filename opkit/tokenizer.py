"""
Tokenizer for Opkit.

Splits pasted text on commas and newlines and works out which of the two
separators the text mainly uses, so results can be written back the same way.
"""

import re
from enum import Enum
from typing import Iterator, List, Tuple


# A run of separators counts as one; empty fields between them are dropped
SEPARATOR_PATTERN = re.compile(r"[\n,]+")


class Delimiter(Enum):
    COMMA = ","
    NEWLINE = "\n"


def infer_delimiter(text: str) -> Delimiter:
    """
    Pick the dominant delimiter of ``text``.

    Newline wins only when it occurs strictly more often than comma, so
    equal counts (including none of either) resolve to comma.
    """
    if text.count("\n") > text.count(","):
        return Delimiter.NEWLINE
    return Delimiter.COMMA


def opposite(delimiter: Delimiter) -> Delimiter:
    if delimiter is Delimiter.NEWLINE:
        return Delimiter.COMMA
    return Delimiter.NEWLINE


def iter_tokens(text: str) -> Iterator[str]:
    """Yield trimmed, non-empty tokens of ``text`` lazily."""
    for field in SEPARATOR_PATTERN.split(text):
        token = field.strip()
        if token:
            yield token


def tokenize(text: str) -> Tuple[List[str], Delimiter]:
    """
    Split ``text`` into tokens and infer its delimiter.

    Args:
        text: Raw comma- or newline-separated text

    Returns:
        (tokens, delimiter) where tokens are whitespace-trimmed and non-empty
    """
    return list(iter_tokens(text)), infer_delimiter(text)
