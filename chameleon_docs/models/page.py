"""Page model."""

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ..database import Base, new_id, utcnow


class Page(Base):
    """One markdown document within a project."""

    __tablename__ = "pages"
    __table_args__ = (
        # Slugs are unique per project, not globally.
        UniqueConstraint("project_id", "slug", name="uq_pages_project_slug"),
        Index("ix_pages_project_order", "project_id", "order", "created_at"),
        Index("ix_pages_project_published", "project_id", "is_published"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(
        String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    section = Column(String(255), nullable=False, default="")
    is_published = Column(Boolean, nullable=False, default=False)
    order = Column(Integer, nullable=False, default=0)
    views = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    project = relationship("Project", back_populates="pages")

    @property
    def status(self) -> str:
        return "Published" if self.is_published else "Draft"
