"""
Context and state types for Opkit.

This module contains the settings dataclass, the buffer/transform enums and
the small value objects that flow between the session and its consumers.
"""

import datetime
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Deque, Dict, Optional

from .pager import PageCursor


DEFAULT_PAGE_SIZE = 5000
DEFAULT_BATCH_SIZE = 1000
DEFAULT_LOG_FILE = "opkit_execution.log"
MAX_LOG_ENTRIES = 500


class Buffer(Enum):
    """The two logical buffers held by a session."""
    INPUT = "input"
    OUTPUT = "output"


class TransformKind(Enum):
    """Every whole-blob operation a consumer can request."""
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    FORMAT_FLIP = "format_flip"
    ADD_QUOTES = "add_quotes"
    STRIP_QUOTES = "strip_quotes"
    NORMALIZE_COMMA = "normalize_comma"


@dataclass
class Settings:
    """Startup configuration, normally loaded from the .data.txt file."""
    page_size: int = DEFAULT_PAGE_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE

    # Numeric encoding; None means "use the profile's value"
    encoding_profile: str = "general"
    encoding_salt: Optional[str] = None
    encoding_min_length: Optional[int] = None
    encoding_alphabet: Optional[str] = None
    encoding_prefix: Optional[str] = None

    log_file: Optional[str] = DEFAULT_LOG_FILE


@dataclass
class BufferState:
    """One blob and the cursor derived from it."""
    blob: str = ""
    cursor: PageCursor = field(default_factory=PageCursor)
    revision: int = 0


@dataclass(frozen=True)
class PageView:
    """What a consumer renders for one buffer."""
    buffer: Buffer
    text: str
    label: str
    current_page: int
    total_pages: int
    # Session-wide change counter at render time; a higher value is newer
    revision: int = 0


@dataclass
class TransformStep:
    """Represents a single whole-blob transform in the registry."""
    kind: TransformKind
    processor: Callable[[str, Any], str]
    description: str
    source: Optional[Buffer] = Buffer.INPUT
    target: Optional[Buffer] = Buffer.OUTPUT

    @property
    def buffer_selectable(self) -> bool:
        """True when the caller may pick a buffer to rewrite in place (quote transforms)."""
        return self.source is None


@dataclass
class OperationLog:
    """Bounded history of the operations a session has performed."""
    entries: Deque[Dict[str, Any]] = field(default_factory=lambda: deque(maxlen=MAX_LOG_ENTRIES))

    def log_change(self, step: str, description: str, before_length: int, after_length: int):
        """Record one completed operation."""
        self.entries.append({
            'step': step,
            'description': description,
            'before_length': before_length,
            'after_length': after_length,
            'timestamp': datetime.datetime.now()
        })

    def get_processing_summary(self) -> str:
        """Get a summary of all operations performed."""
        if not self.entries:
            return "No processing steps completed."

        summary = "Processing Summary:\n"
        for i, entry in enumerate(self.entries, 1):
            summary += f"{i}. {entry['step']}: {entry['description']}\n"
        return summary
