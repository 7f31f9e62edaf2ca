"""Page view analytics.

``Page.views`` is a plain counter. ``PageView`` rows are a 24-hour log of
individual views used for recent-visitor counts and, when enabled, for
de-duplicating repeat views from one address.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..repositories import PageRepository, PageViewRepository, ProjectRepository

logger = logging.getLogger(__name__)

TOP_PAGES_LIMIT = 5


class AnalyticsService:
    """View recording and per-project aggregates."""

    def __init__(self, db: Session):
        self.db = db
        self.project_repo = ProjectRepository(db)
        self.page_repo = PageRepository(db)
        self.view_repo = PageViewRepository(db)

    def record_view(
        self,
        page_id: str,
        ip_address: str,
        user_agent: Optional[str] = None,
        dedupe: Optional[bool] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Log one view and bump the page counter.

        Returns ``{"counted": True}``, or ``{"counted": False, "reason":
        "duplicate"}`` when de-duplication is on and this address viewed the
        page within the last 24 hours. Raises PageNotFoundError for unknown
        pages.
        """
        if dedupe is None:
            dedupe = settings.dedupe_page_views

        page = self.page_repo.get_by_id(page_id)
        if dedupe and self.view_repo.has_recent_view(page.id, ip_address, now):
            return {"counted": False, "reason": "duplicate"}

        self.view_repo.record(page.id, ip_address, user_agent)
        self.page_repo.increment_views(page.id)
        self.db.commit()
        return {"counted": True}

    def project_analytics(self, project_slug: str) -> Dict[str, Any]:
        """Total views across the project and its five most viewed pages."""
        project = self.project_repo.get_by_id(project_slug)
        pages = self.page_repo.list_for_project(project.id)

        total_views = sum(p.views or 0 for p in pages)
        # Stable sort keeps page order among equal counts.
        top = sorted(pages, key=lambda p: p.views or 0, reverse=True)[:TOP_PAGES_LIMIT]
        return {
            "total_views": total_views,
            "top_pages": [{"title": p.title, "slug": p.slug, "views": p.views or 0} for p in top],
        }

    def recent_visitors(self, project_slug: str, now: Optional[datetime] = None) -> int:
        """Distinct addresses that viewed any page of the project in the last 24 hours."""
        project = self.project_repo.get_by_id(project_slug)
        page_ids = self.page_repo.ids_for_projects([project.id])
        return len(self.view_repo.distinct_recent_ips(page_ids, now))

    def cleanup_expired(self, now: Optional[datetime] = None) -> int:
        deleted = self.view_repo.delete_expired(now)
        self.db.commit()
        if deleted:
            logger.info("Purged expired page views", extra={"deleted": deleted})
        return deleted
