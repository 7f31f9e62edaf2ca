"""PageView repository.

Every read applies the 24-hour expiry window, so expired rows that have
not been purged yet are invisible to callers.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from ..database import utcnow
from ..exceptions import PageNotFoundError
from ..models import PageView
from ..models.page_view import PAGE_VIEW_TTL_SECONDS
from .base import BaseRepository


def expiry_cutoff(now: Optional[datetime] = None) -> datetime:
    """Oldest ``created_at`` that is still live."""
    return (now or utcnow()) - timedelta(seconds=PAGE_VIEW_TTL_SECONDS)


class PageViewRepository(BaseRepository[PageView]):
    model_class = PageView
    # Views are only ever addressed through their page.
    not_found_error = PageNotFoundError

    def has_recent_view(self, page_id: str, ip_address: str, now: Optional[datetime] = None) -> bool:
        return (
            self.db.query(PageView.id)
            .filter(
                PageView.page_id == page_id,
                PageView.ip_address == ip_address,
                PageView.created_at >= expiry_cutoff(now),
            )
            .first()
            is not None
        )

    def record(self, page_id: str, ip_address: str, user_agent: Optional[str]) -> PageView:
        return self.add(PageView(page_id=page_id, ip_address=ip_address, user_agent=user_agent))

    def distinct_recent_ips(self, page_ids: List[str], now: Optional[datetime] = None) -> List[str]:
        if not page_ids:
            return []
        rows = (
            self.db.query(PageView.ip_address)
            .filter(
                PageView.page_id.in_(page_ids),
                PageView.created_at >= expiry_cutoff(now),
            )
            .distinct()
            .all()
        )
        return [row[0] for row in rows]

    def delete_expired(self, now: Optional[datetime] = None) -> int:
        return (
            self.db.query(PageView)
            .filter(PageView.created_at < expiry_cutoff(now))
            .delete(synchronize_session=False)
        )

    def delete_for_pages(self, page_ids: List[str]) -> int:
        if not page_ids:
            return 0
        return (
            self.db.query(PageView)
            .filter(PageView.page_id.in_(page_ids))
            .delete(synchronize_session=False)
        )
