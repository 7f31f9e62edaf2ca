"""Reading-preference actions."""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..core.auth import SessionContext
from ..core.revalidation import revalidate_path
from ..schemas.action import ActionResult
from ..schemas.user import OnboardingAnswers, PreferencesUpdate
from ..services import preference_service
from .base import is_signed_in, run_action, run_read, unauthorized


def get_user_preferences(db: Session, session: Optional[SessionContext]) -> Optional[Dict[str, Any]]:
    if not is_signed_in(session):
        return None
    return run_read(
        db,
        lambda: preference_service.get_preferences(db, session.user_id),
        None,
        "Error fetching preferences",
    )


def has_completed_onboarding(db: Session, session: Optional[SessionContext]) -> bool:
    if not is_signed_in(session):
        return False
    return run_read(
        db,
        lambda: preference_service.has_completed_onboarding(db, session.user_id),
        False,
        "Error checking onboarding",
    )


def save_onboarding_preferences(
    db: Session, session: Optional[SessionContext], answers: OnboardingAnswers
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        preferences = preference_service.save_onboarding(db, session.user_id, answers)
        revalidate_path("/dashboard")
        revalidate_path("/onboarding")
        return ActionResult.ok(preferences=preferences)

    return run_action(db, body, "Failed to save preferences")


def update_preferences(
    db: Session, session: Optional[SessionContext], update: PreferencesUpdate
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        preferences = preference_service.update_preferences(db, session.user_id, update)
        revalidate_path("/dashboard/settings")
        return ActionResult.ok(preferences=preferences)

    return run_action(db, body, "Failed to update preferences")


def update_default_simplification_level(
    db: Session, session: Optional[SessionContext], level: str
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        preferences = preference_service.update_default_level(db, session.user_id, level)
        return ActionResult.ok(level=preferences["default_simplification_level"])

    return run_action(db, body, "Failed to update level")
