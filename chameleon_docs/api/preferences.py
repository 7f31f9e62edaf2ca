"""Reading preference endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..actions import preference_actions
from ..core.auth import SessionContext, optional_session
from ..database import get_db
from ..schemas.user import DefaultLevelUpdate, OnboardingAnswers, OnboardingStatus, PreferencesUpdate
from .responses import action_response

router = APIRouter(prefix="/api/preferences", tags=["Preferences"])


@router.get("")
def get_preferences(
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
) -> Optional[Dict[str, Any]]:
    """Stored preferences, or ``null`` without a session."""
    return preference_actions.get_user_preferences(db, session)


@router.put("")
def update_preferences(
    body: PreferencesUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return action_response(response, preference_actions.update_preferences(db, session, body))


@router.get("/onboarding", response_model=OnboardingStatus)
def onboarding_status(
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return OnboardingStatus(completed=preference_actions.has_completed_onboarding(db, session))


@router.post("/onboarding")
def complete_onboarding(
    body: OnboardingAnswers,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return action_response(response, preference_actions.save_onboarding_preferences(db, session, body))


@router.put("/default-level")
def update_default_level(
    body: DefaultLevelUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    result = preference_actions.update_default_simplification_level(db, session, body.level)
    return action_response(response, result)
