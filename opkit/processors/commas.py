"""
Comma normalization processor for Opkit.

Lists copied from Chinese documents often use the full-width comma, which
the tokenizer does not treat as a separator.
"""

FULLWIDTH_COMMA = "，"
ASCII_COMMA = ","


def normalize_comma(ch: str) -> str:
    """Map the full-width comma to an ASCII comma; other characters pass through."""
    if ch == FULLWIDTH_COMMA:
        return ASCII_COMMA
    return ch
