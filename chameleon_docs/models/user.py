"""User model.

Users sign in with email/password and own projects by email. Reading
preferences drive the default reimagine level.
"""

from sqlalchemy import Column, String, Text, DateTime, JSON

from ..database import Base, new_id, utcnow

SIMPLIFICATION_LEVELS = ("technical", "standard", "simplified", "beginner", "noob")

DEFAULT_PREFERENCES = {
    "tech_background": "beginner",
    "primary_role": "",
    "learning_style": "detailed",
    "experience_with_docs": "sometimes",
    "preferred_explanation_depth": "moderate",
    "default_simplification_level": "standard",
    "has_completed_onboarding": False,
}


def default_preferences() -> dict:
    return dict(DEFAULT_PREFERENCES)


class User(Base):
    """User account."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    # NULL for accounts created without credentials (e.g. OAuth imports).
    password_hash = Column(Text, nullable=True)
    image = Column(Text, nullable=True)
    simplification_preferences = Column(JSON, nullable=False, default=default_preferences)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
