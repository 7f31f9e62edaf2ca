"""Reading preferences stored on the user record."""

import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from ..models.user import DEFAULT_PREFERENCES
from ..repositories import UserRepository
from ..schemas.user import OnboardingAnswers, PreferencesUpdate

logger = logging.getLogger(__name__)

# Tech background chosen at onboarding -> default reimagine level.
LEVEL_BY_BACKGROUND = {
    "none": "noob",
    "beginner": "beginner",
    "intermediate": "simplified",
    "advanced": "standard",
    "expert": "technical",
}


def level_for_background(tech_background: str) -> str:
    return LEVEL_BY_BACKGROUND.get(tech_background, "standard")


def get_preferences(db: Session, user_id: str) -> Dict[str, Any]:
    """Stored preferences with defaults filled in for missing keys."""
    user = UserRepository(db).get_by_id(user_id)
    return {**DEFAULT_PREFERENCES, **(user.simplification_preferences or {})}


def has_completed_onboarding(db: Session, user_id: str) -> bool:
    return get_preferences(db, user_id).get("has_completed_onboarding") is True


def save_onboarding(db: Session, user_id: str, answers: OnboardingAnswers) -> Dict[str, Any]:
    """Replace preferences with the onboarding answers and mark onboarding done."""
    user = UserRepository(db).get_by_id(user_id)
    preferences = {
        **answers.model_dump(),
        "default_simplification_level": level_for_background(answers.tech_background),
        "has_completed_onboarding": True,
    }
    # JSON columns only persist on reassignment.
    user.simplification_preferences = preferences
    db.commit()
    logger.info(
        "Onboarding completed",
        extra={"user_id": user_id, "level": preferences["default_simplification_level"]},
    )
    return dict(preferences)


def update_preferences(db: Session, user_id: str, update: PreferencesUpdate) -> Dict[str, Any]:
    """Merge the fields set in *update* over the stored preferences."""
    user = UserRepository(db).get_by_id(user_id)
    merged = {
        **DEFAULT_PREFERENCES,
        **(user.simplification_preferences or {}),
        **update.model_dump(exclude_none=True),
    }
    user.simplification_preferences = merged
    db.commit()
    return dict(merged)


def update_default_level(db: Session, user_id: str, level: str) -> Dict[str, Any]:
    user = UserRepository(db).get_by_id(user_id)
    preferences = {
        **DEFAULT_PREFERENCES,
        **(user.simplification_preferences or {}),
        "default_simplification_level": level,
    }
    user.simplification_preferences = preferences
    db.commit()
    return dict(preferences)
