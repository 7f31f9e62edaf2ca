"""PageView model: short-lived per-visit records for view analytics."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text

from ..database import Base, new_id, utcnow

# Records older than this are treated as expired and purged.
PAGE_VIEW_TTL_SECONDS = 24 * 60 * 60


class PageView(Base):
    """A single recorded visit to a page.

    Rows expire PAGE_VIEW_TTL_SECONDS after ``created_at``: every query
    filters them out and ``AnalyticsService.cleanup_expired`` deletes them.
    """

    __tablename__ = "page_views"
    __table_args__ = (
        Index("ix_page_views_page_ip_created", "page_id", "ip_address", "created_at"),
        Index("ix_page_views_created_at", "created_at"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    page_id = Column(
        String(32), ForeignKey("pages.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ip_address = Column(String(64), nullable=False)
    user_agent = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
