"""Drag-and-drop state for the section board in the editor.

Dropping a section moves it to the slot of the section it was dropped on,
updates the local order at once and then persists it. A failed persist is
reported through ``last_error`` and the local order is kept. Holding a drag
for two seconds collapses every section to a compact view until the drop.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from ..services.section_service import UNCATEGORIZED, move_section, persistable_order

logger = logging.getLogger(__name__)

HOLD_COLLAPSE_SECONDS = 2.0

# Receives the new order (without Uncategorized); returns an object with
# ``success`` and ``error`` such as an ActionResult.
PersistOrder = Callable[[List[str]], Any]


@dataclass(frozen=True)
class DropOutcome:
    order: List[str]
    moved: bool
    persisted: bool
    error: Optional[str] = None


class SectionBoard:
    def __init__(
        self,
        sections: Sequence[str],
        persist: PersistOrder,
        has_uncategorized: bool = False,
        hold_seconds: float = HOLD_COLLAPSE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._order = persistable_order(sections)
        self._persist = persist
        self.has_uncategorized = has_uncategorized or UNCATEGORIZED in sections
        self.hold_seconds = hold_seconds
        self._clock = clock
        self._active: Optional[str] = None
        self._drag_started = 0.0
        self.collapsed = False
        self.last_error: Optional[str] = None

    @property
    def order(self) -> List[str]:
        """Named sections in order, as persisted."""
        return list(self._order)

    @property
    def display_order(self) -> List[str]:
        """Order as rendered: Uncategorized (when present) always first."""
        prefix = [UNCATEGORIZED] if self.has_uncategorized else []
        return prefix + self._order

    @property
    def active(self) -> Optional[str]:
        return self._active

    def is_draggable(self, section: str) -> bool:
        return section != UNCATEGORIZED and section in self._order

    def start_drag(self, section: str) -> bool:
        if not self.is_draggable(section):
            return False
        self._active = section
        self._drag_started = self._clock()
        return True

    def tick(self) -> bool:
        """Collapse the board once the drag has been held long enough."""
        if self._active is not None and not self.collapsed:
            if self._clock() - self._drag_started >= self.hold_seconds:
                self.collapsed = True
        return self.collapsed

    def cancel_drag(self) -> None:
        self._active = None
        self.collapsed = False

    def drop(self, over: Optional[str]) -> DropOutcome:
        """Finish the drag over *over* (``None`` when dropped outside any section)."""
        active = self._active
        self.cancel_drag()

        if active is None or over is None:
            return DropOutcome(self.order, moved=False, persisted=False)

        new_order = move_section(self._order, active, over)
        if new_order == self._order:
            return DropOutcome(self.order, moved=False, persisted=False)

        # Optimistic: local order changes before the server answers.
        self._order = new_order
        error = self._save(new_order)
        self.last_error = error
        return DropOutcome(self.order, moved=True, persisted=error is None, error=error)

    def _save(self, order: List[str]) -> Optional[str]:
        try:
            result = self._persist(list(order))
        except Exception as exc:
            logger.warning("Failed to persist section order: %s", exc)
            return "Failed to update section order"
        if getattr(result, "success", bool(result)):
            return None
        return getattr(result, "error", None) or "Failed to update section order"
