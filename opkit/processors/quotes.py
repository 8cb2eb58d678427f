"""
Quote processors for Opkit.

Wraps tokens in single quotes (for pasting id lists into SQL ``IN (...)``
clauses) and removes them again.
"""

QUOTE = "'"


def is_quoted(token: str) -> bool:
    """True when ``token`` starts and ends with a single quote."""
    return len(token) >= 2 and token[0] == QUOTE and token[-1] == QUOTE


def add_quotes(token: str) -> str:
    """Wrap ``token`` in single quotes unless it is already wrapped."""
    if is_quoted(token):
        return token
    return f"{QUOTE}{token}{QUOTE}"


def strip_quotes(token: str) -> str:
    """Remove one leading and one trailing single quote if both are present."""
    if is_quoted(token):
        return token[1:-1]
    return token
