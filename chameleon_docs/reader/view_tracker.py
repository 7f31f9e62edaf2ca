"""Reader-side view tracking: one increment per mounted page."""

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class ViewTracker:
    """Calls *track* once for each page that is mounted.

    Re-rendering the same page (or mounting it twice in a row) does not
    count again; ``unmount`` re-arms the tracker. Tracking is
    fire-and-forget, so failures are logged and swallowed.
    """

    def __init__(self, track: Callable[[str], Any]):
        self._track = track
        self._tracked_page_id: Optional[str] = None

    @property
    def tracked_page_id(self) -> Optional[str]:
        return self._tracked_page_id

    def mount(self, page_id: Optional[str]) -> bool:
        """Returns True when this call sent a view."""
        if not page_id or page_id == self._tracked_page_id:
            return False
        self._tracked_page_id = page_id
        try:
            self._track(page_id)
        except Exception as exc:
            logger.warning("Page view tracking failed for %s: %s", page_id, exc)
        return True

    def unmount(self) -> None:
        self._tracked_page_id = None
