"""Account actions: registration, sign in/out, profile, password, deletion."""

import logging
from typing import Optional

from fastapi import Response
from sqlalchemy.orm import Session

from ..core.auth import SessionContext, end_session, start_session
from ..core.revalidation import revalidate_path
from ..schemas.action import ActionResult
from ..schemas.user import MeResponse, UserResponse
from ..services import auth_service, preference_service
from .base import is_signed_in, run_action, run_read, unauthorized

logger = logging.getLogger(__name__)


def register_user(db: Session, name: str, email: str, password: str) -> ActionResult:
    def body() -> ActionResult:
        user = auth_service.register_user(db, name, email, password)
        return ActionResult.ok(user_id=user.id)

    return run_action(db, body, "Registration failed")


def sign_in(db: Session, response: Response, email: str, password: str) -> ActionResult:
    """Verify credentials and attach a session cookie to *response*."""
    def body() -> ActionResult:
        user = auth_service.authenticate(db, email, password)
        token = start_session(response, user.id, user.email)
        logger.info("User signed in", extra={"user_id": user.id})
        return ActionResult.ok(user_id=user.id, token=token)

    return run_action(db, body, "Sign in failed")


def sign_out(response: Response) -> ActionResult:
    end_session(response)
    return ActionResult.ok()


def get_current_user(db: Session, session: Optional[SessionContext]) -> Optional[MeResponse]:
    if not is_signed_in(session):
        return None

    def body() -> MeResponse:
        user = auth_service.get_user(db, session.user_id)
        return MeResponse(
            user=UserResponse.model_validate(user),
            preferences=preference_service.get_preferences(db, session.user_id),
        )

    return run_read(db, body, None, "Failed to load current user")


def update_user_profile(
    db: Session,
    session: Optional[SessionContext],
    name: Optional[str] = None,
    image: Optional[str] = None,
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        user = auth_service.update_profile(db, session.user_id, name=name, image=image)
        return ActionResult.ok(name=user.name, image=user.image)

    return run_action(db, body, "Failed to update profile")


def update_user_password(
    db: Session,
    session: Optional[SessionContext],
    current_password: str,
    new_password: str,
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        auth_service.change_password(db, session.user_id, current_password, new_password)
        return ActionResult.ok()

    return run_action(db, body, "Failed to update password")


def delete_user_account(db: Session, session: Optional[SessionContext], response: Response) -> ActionResult:
    """Delete the account with everything it owns, then end the session."""
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        for slug in auth_service.delete_account(db, session.user_id):
            revalidate_path(f"/p/{slug}")
        revalidate_path("/dashboard")
        end_session(response)
        return ActionResult.ok()

    return run_action(db, body, "Failed to delete account")
