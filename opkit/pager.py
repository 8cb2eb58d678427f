"""
Pagination for Opkit.

Slices a blob into fixed-size pages measured in code points and keeps a
1-indexed cursor over them. Python strings index by code point, so a page
boundary never splits a multi-byte character.
"""

from dataclasses import dataclass, replace
from typing import Iterator

from .errors import ConfigError


def _check_page_size(page_size: int):
    if page_size < 1:
        raise ConfigError(f"page_size must be positive, got {page_size}")


def paginate(blob: str, page_size: int) -> int:
    """Return the number of pages needed to show ``blob`` (0 when empty)."""
    _check_page_size(page_size)
    return -(-len(blob) // page_size)


@dataclass(frozen=True)
class PageCursor:
    """Current page and page count of one buffer."""
    current_page: int = 1
    total_pages: int = 0

    @classmethod
    def for_blob(cls, blob: str, page_size: int) -> 'PageCursor':
        """Fresh cursor on page 1 of ``blob``."""
        return cls(current_page=1, total_pages=paginate(blob, page_size))

    def goto(self, page: int) -> 'PageCursor':
        """Move to ``page``; out-of-range pages leave the cursor unchanged."""
        if page < 1 or page > self.total_pages:
            return self
        return replace(self, current_page=page)

    def first(self) -> 'PageCursor':
        return self.goto(1)

    def previous(self) -> 'PageCursor':
        return self.goto(self.current_page - 1)

    def next(self) -> 'PageCursor':
        return self.goto(self.current_page + 1)

    def last(self) -> 'PageCursor':
        return self.goto(self.total_pages)


def render_page(blob: str, cursor: PageCursor, page_size: int) -> str:
    """Return the slice of ``blob`` visible at ``cursor``."""
    _check_page_size(page_size)
    if not blob or cursor.total_pages == 0:
        return ""
    start = (cursor.current_page - 1) * page_size
    end = min(cursor.current_page * page_size, len(blob))
    return blob[start:end]


def page_label(cursor: PageCursor) -> str:
    """Page indicator text; single-page and empty blobs get none."""
    if cursor.total_pages > 1:
        return f"Page {cursor.current_page}/{cursor.total_pages}"
    return ""


def iter_pages(blob: str, page_size: int) -> Iterator[str]:
    """Yield every page of ``blob`` in order."""
    cursor = PageCursor.for_blob(blob, page_size)
    for page in range(1, cursor.total_pages + 1):
        yield render_page(blob, cursor.goto(page), page_size)
