"""Project model."""

import random

from sqlalchemy import Boolean, Column, DateTime, Index, JSON, String, Text
from sqlalchemy.orm import relationship

from ..database import Base, new_id, utcnow

DEFAULT_EMOJIS = [
    "📚", "📖", "📝", "✨", "🚀", "💡", "🎯", "⚡", "🔥", "💎",
    "🌟", "📋", "🗂️", "📁", "🎨", "🔧", "⚙️", "🏗️", "📊", "🧩",
]
DEFAULT_THEME_COLOR = "#6366f1"
DEFAULT_THEME_FONT = "Inter"


def random_emoji() -> str:
    return random.choice(DEFAULT_EMOJIS)


class Project(Base):
    """A documentation workspace owned by one user."""

    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_owner_email", "owner_email"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    # Globally unique, derived from name.
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    owner_email = Column(String(255), nullable=False)
    is_public = Column(Boolean, nullable=False, default=False)
    emoji = Column(String(16), nullable=False, default=random_emoji)

    theme_color = Column(String(32), nullable=False, default=DEFAULT_THEME_COLOR)
    theme_font = Column(String(64), nullable=False, default=DEFAULT_THEME_FONT)

    # Named sections in display order; "Uncategorized" is never stored.
    section_order = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    pages = relationship(
        "Page",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
