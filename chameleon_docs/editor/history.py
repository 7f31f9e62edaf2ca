"""Undo/redo history for the page editor.

A bounded, linear list of ``(content, cursor)`` snapshots with a pointer to
the current one. Typing is debounced so a burst of keystrokes becomes one
entry; toolbar formatting and AI edits are recorded immediately.

The clock is injectable so debounce behaviour can be tested without
sleeping.
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

MAX_HISTORY = 100
DEBOUNCE_SECONDS = 0.5


@dataclass(frozen=True)
class Snapshot:
    content: str
    cursor: int = 0


class EditorHistory:
    """Linear undo/redo stack.

    ``push`` discards any redo states, ignores a snapshot whose content
    equals the current one, and drops the oldest entry once ``max_entries``
    is exceeded. ``undo``/``redo`` return the snapshot to restore, or
    ``None`` when there is nothing to move to.
    """

    def __init__(
        self,
        initial_content: str = "",
        initial_cursor: int = 0,
        max_entries: int = MAX_HISTORY,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.debounce_seconds = debounce_seconds
        self._clock = clock
        self._entries: List[Snapshot] = [Snapshot(initial_content, initial_cursor)]
        self._index = 0
        self._pending: Optional[Snapshot] = None
        self._pending_since = 0.0

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Snapshot:
        return self._entries[self._index]

    @property
    def entries(self) -> List[Snapshot]:
        return list(self._entries)

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def push(self, content: str, cursor: int = 0) -> bool:
        """Record a snapshot immediately. Returns False when it was skipped."""
        if content == self.current.content:
            return False

        del self._entries[self._index + 1:]
        self._entries.append(Snapshot(content, cursor))
        if len(self._entries) > self.max_entries:
            del self._entries[0:len(self._entries) - self.max_entries]
        self._index = len(self._entries) - 1
        return True

    def record_change(self, content: str, cursor: int = 0) -> None:
        """Note a text change; it is pushed after the debounce interval.

        A change arriving within the interval replaces the pending one, so
        only the last state of a typing burst is kept.
        """
        self._pending = Snapshot(content, cursor)
        self._pending_since = self._clock()

    def tick(self) -> bool:
        """Push the pending change if it has been idle for the debounce interval."""
        if self._pending is None:
            return False
        if self._clock() - self._pending_since < self.debounce_seconds:
            return False
        return self.flush()

    def flush(self) -> bool:
        """Push the pending change now, regardless of the debounce interval."""
        if self._pending is None:
            return False
        pending, self._pending = self._pending, None
        return self.push(pending.content, pending.cursor)

    def push_immediate(self, content: str, cursor: int = 0) -> bool:
        """Record a formatting or AI edit: flush pending typing, then push."""
        self.flush()
        return self.push(content, cursor)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def undo(self) -> Optional[Snapshot]:
        self.flush()
        if not self.can_undo():
            return None
        self._index -= 1
        return self.current

    def redo(self) -> Optional[Snapshot]:
        if self._pending is not None:
            # New typing ends the redo branch once it is recorded.
            self.flush()
        if not self.can_redo():
            return None
        self._index += 1
        return self.current

    def reset(self, content: str, cursor: int = 0) -> None:
        """Start over from *content*, e.g. when switching pages."""
        self._entries = [Snapshot(content, cursor)]
        self._index = 0
        self._pending = None
