"""Page repository.

Owns page ordering: every listing is sorted by ``(order, created_at)``.
"""

from typing import List, Optional

from sqlalchemy import func

from ..exceptions import PageNotFoundError
from ..models import Page
from .base import BaseRepository


class PageRepository(BaseRepository[Page]):
    model_class = Page
    not_found_error = PageNotFoundError

    def list_for_project(self, project_id: str) -> List[Page]:
        return (
            self.db.query(Page)
            .filter(Page.project_id == project_id)
            .order_by(Page.order.asc(), Page.created_at.asc())
            .all()
        )

    def get_by_slug(self, project_id: str, slug: str) -> Optional[Page]:
        return (
            self.db.query(Page)
            .filter(Page.project_id == project_id, Page.slug == slug)
            .first()
        )

    def slug_taken(self, project_id: str, slug: str, exclude_page_id: Optional[str] = None) -> bool:
        query = self.db.query(Page.id).filter(Page.project_id == project_id, Page.slug == slug)
        if exclude_page_id is not None:
            query = query.filter(Page.id != exclude_page_id)
        return query.first() is not None

    def next_order(self, project_id: str) -> int:
        """Sort position that places a new page after all existing ones."""
        current = (
            self.db.query(func.max(Page.order))
            .filter(Page.project_id == project_id)
            .scalar()
        )
        return 0 if current is None else current + 1

    def increment_views(self, page_id: str) -> None:
        """Atomic ``views = views + 1`` issued as a single UPDATE."""
        self.db.query(Page).filter(Page.id == page_id).update(
            {Page.views: Page.views + 1}, synchronize_session=False
        )

    def ids_for_projects(self, project_ids: List[str]) -> List[str]:
        if not project_ids:
            return []
        rows = self.db.query(Page.id).filter(Page.project_id.in_(project_ids)).all()
        return [row[0] for row in rows]

    def delete_for_projects(self, project_ids: List[str]) -> int:
        if not project_ids:
            return 0
        return (
            self.db.query(Page)
            .filter(Page.project_id.in_(project_ids))
            .delete(synchronize_session=False)
        )
