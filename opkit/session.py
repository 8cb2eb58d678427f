"""
Session state for Opkit.

A Session owns the full input and output blobs together with their page
cursors. Every operation runs under one lock: it reads the blobs, computes
a complete new blob, swaps it in with a fresh cursor and renders the
visible page before the lock is released, so a caller never sees a page
that belongs to a different blob.
"""

import threading
from typing import Any, Dict, List, Optional, Union

from .batch import BatchStats
from .context import (
    Buffer,
    BufferState,
    OperationLog,
    PageView,
    Settings,
    TransformKind,
)
from .errors import ConfigError
from .logging import log_message
from .pager import PageCursor, page_label, render_page
from .pipeline import create_transform_registry, get_available_transforms, parse_transform_kind
from .processors.numeric import NumericCodec


NAVIGATION_MOVES = ('first', 'previous', 'next', 'last')


class Session:
    """
    Input/output buffers shared by every caller of one running tool.

    Construct it once at startup and hand the same instance to every
    consumer; all public methods are safe to call from several threads.
    """

    def __init__(self, settings: Optional[Settings] = None, codec: Optional[NumericCodec] = None):
        self.settings = settings or Settings()
        if self.settings.page_size < 1:
            raise ConfigError(f"page_size must be positive, got {self.settings.page_size}")
        if self.settings.batch_size < 1:
            raise ConfigError(f"batch_size must be positive, got {self.settings.batch_size}")

        self.codec = codec or NumericCodec.from_settings(self.settings)
        self._registry = create_transform_registry(self.codec, self.settings.batch_size)
        self._lock = threading.Lock()
        self._buffers: Dict[Buffer, BufferState] = {
            Buffer.INPUT: BufferState(),
            Buffer.OUTPUT: BufferState(),
        }
        self._revision = 0
        self.history = OperationLog()

    @property
    def page_size(self) -> int:
        return self.settings.page_size

    # Internal helpers, callers must hold self._lock

    def _store(self, buffer: Buffer, blob: str, cursor: PageCursor) -> BufferState:
        self._revision += 1
        state = BufferState(blob=blob, cursor=cursor, revision=self._revision)
        self._buffers[buffer] = state
        return state

    def _replace(self, buffer: Buffer, blob: str) -> BufferState:
        return self._store(buffer, blob, PageCursor.for_blob(blob, self.page_size))

    def _render(self, buffer: Buffer) -> PageView:
        state = self._buffers[buffer]
        return PageView(
            buffer=buffer,
            text=render_page(state.blob, state.cursor, self.page_size),
            label=page_label(state.cursor),
            current_page=state.cursor.current_page,
            total_pages=state.cursor.total_pages,
            revision=state.revision,
        )

    def _source_text(self, buffer: Buffer, draft: str) -> str:
        blob = self._buffers[buffer].blob
        # Typed-but-uncommitted text only stands in for the input buffer
        if buffer is Buffer.INPUT and not blob:
            return draft or ""
        return blob

    # Public operations

    def set_input(self, text: str) -> PageView:
        """
        Commit ``text`` as the full input blob, as a paste action does.

        Empty text leaves the current input untouched.
        """
        with self._lock:
            if not text:
                view = self._render(Buffer.INPUT)
                committed = False
            else:
                before = len(self._buffers[Buffer.INPUT].blob)
                self._replace(Buffer.INPUT, text)
                self.history.log_change('set_input', f"Committed {len(text)} characters", before, len(text))
                view = self._render(Buffer.INPUT)
                committed = True

        if committed:
            log_message(f"Input committed: {len(text)} characters, {view.total_pages} pages")
        else:
            log_message("Ignoring empty paste, input unchanged", level="DEBUG")
        return view

    def clear(self, buffer: Buffer) -> PageView:
        """Empty ``buffer`` and reset its cursor."""
        with self._lock:
            before = len(self._buffers[buffer].blob)
            self._replace(buffer, "")
            self.history.log_change(f'clear_{buffer.value}', "Cleared buffer", before, 0)
            view = self._render(buffer)
        log_message(f"Cleared {buffer.value} buffer ({before} characters)")
        return view

    def clear_input(self) -> PageView:
        return self.clear(Buffer.INPUT)

    def clear_output(self) -> PageView:
        return self.clear(Buffer.OUTPUT)

    def run_transform(self, kind: Union[TransformKind, str], draft: str = "",
                      buffer: Optional[Buffer] = None) -> PageView:
        """
        Run one transform over a whole blob and show page 1 of the result.

        Args:
            kind: Which transform to run (a TransformKind or its name)
            draft: Uncommitted input text, used only when no input has been committed
            buffer: For quote transforms, a buffer to rewrite in place; by
                default they read the input and write the output like the
                other transforms. Ignored by transforms with fixed routing

        Returns:
            PageView of the buffer that was written
        """
        if isinstance(kind, str):
            kind = parse_transform_kind(kind)
        step = self._registry[kind]

        if step.buffer_selectable and buffer is not None:
            source = target = buffer
        elif step.buffer_selectable:
            source, target = Buffer.INPUT, Buffer.OUTPUT
        else:
            if buffer is not None and buffer is not step.target:
                log_message(f"{kind.value} always writes the {step.target.value} buffer; "
                            f"ignoring requested {buffer.value} buffer", level="WARNING")
            source, target = step.source, step.target

        stats = BatchStats()
        with self._lock:
            text = self._source_text(source, draft)
            result = step.processor(text, stats)
            self._replace(target, result)
            self.history.log_change(
                kind.value,
                f"{step.description}: {stats.changed} of {stats.tokens} changed",
                len(text), len(result),
            )
            view = self._render(target)

        log_message(f"{step.description} ({source.value} -> {target.value}): "
                    f"{stats.changed} of {stats.tokens} changed in {stats.chunks} chunks, "
                    f"{len(result)} characters, {view.total_pages} pages")
        return view

    def goto_page(self, buffer: Buffer, page: int) -> PageView:
        """
        Show ``page`` of ``buffer``.

        Pages outside 1..total_pages are ignored and the current page is
        rendered again.
        """
        with self._lock:
            state = self._buffers[buffer]
            cursor = state.cursor.goto(page)
            if cursor is not state.cursor:
                self._store(buffer, state.blob, cursor)
            view = self._render(buffer)
        if cursor is state.cursor and page != state.cursor.current_page:
            log_message(f"Page {page} out of range for {buffer.value} buffer "
                        f"(1..{state.cursor.total_pages}), staying on page {view.current_page}", level="DEBUG")
        return view

    def navigate(self, buffer: Buffer, move: str) -> PageView:
        """
        Apply a relative move ('first', 'previous', 'next' or 'last') to ``buffer``.

        The move is resolved against the cursor inside the lock, so two
        quick 'next' clicks always advance two pages.
        """
        if move not in NAVIGATION_MOVES:
            raise ValueError(f"Unknown page move '{move}' (known: {', '.join(NAVIGATION_MOVES)})")
        with self._lock:
            state = self._buffers[buffer]
            cursor = getattr(state.cursor, move)()
            self._store(buffer, state.blob, cursor)
            return self._render(buffer)

    def goto_input_page(self, page: int) -> PageView:
        return self.goto_page(Buffer.INPUT, page)

    def goto_output_page(self, page: int) -> PageView:
        return self.goto_page(Buffer.OUTPUT, page)

    def view(self, buffer: Buffer) -> PageView:
        """Render the current page of ``buffer`` without changing anything."""
        with self._lock:
            return self._render(buffer)

    def cursor(self, buffer: Buffer) -> PageCursor:
        with self._lock:
            return self._buffers[buffer].cursor

    def current_output_blob(self) -> str:
        """Full output text, for "copy full result" actions."""
        with self._lock:
            return self._buffers[Buffer.OUTPUT].blob

    def current_input_blob(self) -> str:
        with self._lock:
            return self._buffers[Buffer.INPUT].blob

    def available_transforms(self) -> List[Dict[str, Any]]:
        return get_available_transforms(self._registry)

    def get_processing_summary(self) -> str:
        with self._lock:
            return self.history.get_processing_summary()
