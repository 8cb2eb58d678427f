"""
Batch processing for Opkit.

Applies a token transform across a whole blob in fixed-size chunks and
writes the result back with the delimiter the input used. Chunking only
bounds how much transient data is built at once; the output is the same
for every batch size.
"""

from dataclasses import dataclass
from itertools import islice
from typing import Callable, List, Optional

from .context import DEFAULT_BATCH_SIZE
from .errors import ConfigError
from .tokenizer import Delimiter, infer_delimiter, iter_tokens, opposite


TokenTransform = Callable[[str], str]


@dataclass
class BatchStats:
    """Counters filled in by a batch run, used for log messages."""
    tokens: int = 0
    changed: int = 0
    chunks: int = 0


def _check_batch_size(batch_size: int):
    if batch_size < 1:
        raise ConfigError(f"batch_size must be positive, got {batch_size}")


def identity(token: str) -> str:
    return token


def apply_batch(text: str, transform: TokenTransform,
                batch_size: int = DEFAULT_BATCH_SIZE,
                delimiter: Optional[Delimiter] = None,
                stats: Optional[BatchStats] = None) -> str:
    """
    Transform every token of ``text`` and rejoin them.

    Args:
        text: Raw comma- or newline-separated text
        transform: Function applied to each trimmed token
        batch_size: Number of tokens handled per chunk
        delimiter: Delimiter for the output, inferred from ``text`` when None
        stats: Optional counters to update

    Returns:
        The transformed tokens joined by a single delimiter character
    """
    _check_batch_size(batch_size)
    if delimiter is None:
        delimiter = infer_delimiter(text)
    separator = delimiter.value

    tokens = iter_tokens(text)
    chunks: List[str] = []
    while True:
        chunk = list(islice(tokens, batch_size))
        if not chunk:
            break
        results = [transform(token) for token in chunk]
        if stats is not None:
            stats.chunks += 1
            stats.tokens += len(chunk)
            stats.changed += sum(1 for before, after in zip(chunk, results) if before != after)
        chunks.append(separator.join(results))

    return separator.join(chunks)


def flip_format(text: str, batch_size: int = DEFAULT_BATCH_SIZE,
                stats: Optional[BatchStats] = None) -> str:
    """Rewrite ``text`` with the opposite delimiter (comma <-> newline)."""
    return apply_batch(text, identity, batch_size,
                       delimiter=opposite(infer_delimiter(text)), stats=stats)


def apply_per_char(text: str, transform: Callable[[str], str],
                   batch_size: int = DEFAULT_BATCH_SIZE,
                   stats: Optional[BatchStats] = None) -> str:
    """Map every character of ``text`` through ``transform`` in chunks of ``batch_size``."""
    _check_batch_size(batch_size)
    chunks: List[str] = []
    for start in range(0, len(text), batch_size):
        piece = text[start:start + batch_size]
        mapped = "".join(transform(ch) for ch in piece)
        if stats is not None:
            stats.chunks += 1
            stats.tokens += len(piece)
            stats.changed += sum(1 for before, after in zip(piece, mapped) if before != after)
        chunks.append(mapped)
    return "".join(chunks)
