"""Editing state for one page: content, selection, history, save and AI edits."""

import logging
import time
from typing import Any, Callable, Optional

from ..client.reimagine_stream import GENERIC_ERROR, ProgressCallback, ReimagineClient, ReimagineStreamError
from .formatting import apply_format, rewrite_source, splice_rewrite
from .history import EditorHistory, Snapshot

logger = logging.getLogger(__name__)

# Receives (page_id, content); returns an object with ``success``/``error``.
SaveContent = Callable[[str, str], Any]


class EditorSession:
    """Client-side editor model for a single page."""

    def __init__(
        self,
        page_id: str,
        content: str,
        save: SaveContent,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.page_id = page_id
        self.content = content
        self.selection_start = 0
        self.selection_end = 0
        self._save = save
        self.history = EditorHistory(content, clock=clock)
        self.saved_content = content
        self.is_reimagining = False
        self.stream_buffer = ""
        self.last_error: Optional[str] = None

    @property
    def cursor(self) -> int:
        return self.selection_end

    @property
    def is_dirty(self) -> bool:
        return self.content != self.saved_content

    def select(self, start: int, end: Optional[int] = None) -> None:
        end = start if end is None else end
        self.selection_start, self.selection_end = min(start, end), max(start, end)

    def edit(self, content: str, cursor: Optional[int] = None) -> None:
        """Apply a keystroke-level change. Recorded after the debounce."""
        self.content = content
        self.select(len(content) if cursor is None else cursor)
        self.history.record_change(content, self.cursor)

    def tick(self) -> bool:
        return self.history.tick()

    def format(self, action: str) -> None:
        """Apply a toolbar action to the current selection and record it at once."""
        result = apply_format(self.content, self.selection_start, self.selection_end, action)
        self.content = result.content
        self.select(result.selection_start, result.selection_end)
        self.history.push_immediate(self.content, self.cursor)

    def undo(self) -> bool:
        return self._restore(self.history.undo())

    def redo(self) -> bool:
        return self._restore(self.history.redo())

    def apply_rewrite(self, text: str) -> None:
        """Splice a finished rewrite into the selection (or whole page)."""
        result = splice_rewrite(self.content, self.selection_start, self.selection_end, text)
        self.content = result.content
        self.select(result.selection_start, result.selection_end)
        self.history.push_immediate(self.content, self.cursor)

    def reimagine(
        self,
        client: ReimagineClient,
        mode: Optional[str] = "custom",
        prompt: Optional[str] = None,
        simplification_level: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> bool:
        """Stream a rewrite of the selection and splice it in when complete.

        On failure the partial buffer is discarded, the content is left as
        it was and ``last_error`` holds the generic message.
        """
        if self.is_reimagining:
            return False
        source = rewrite_source(self.content, self.selection_start, self.selection_end)
        self.is_reimagining = True
        self.stream_buffer = ""
        self.last_error = None
        try:
            for chunk in client.stream(source, mode, prompt, simplification_level):
                self.stream_buffer += chunk
                if on_progress is not None:
                    on_progress(chunk, self.stream_buffer)
        except ReimagineStreamError:
            self.stream_buffer = ""
            self.last_error = GENERIC_ERROR
            return False
        finally:
            self.is_reimagining = False

        self.apply_rewrite(self.stream_buffer)
        self.stream_buffer = ""
        return True

    def save(self) -> bool:
        """Persist the current content. Last write wins."""
        self.history.flush()
        content = self.content
        result = self._save(self.page_id, content)
        if getattr(result, "success", False):
            self.saved_content = content
            self.last_error = None
            return True
        self.last_error = getattr(result, "error", None) or "Failed to save"
        logger.warning("Save failed for page %s: %s", self.page_id, self.last_error)
        return False

    def _restore(self, snapshot: Optional[Snapshot]) -> bool:
        if snapshot is None:
            return False
        self.content = snapshot.content
        self.select(min(snapshot.cursor, len(snapshot.content)))
        return True
