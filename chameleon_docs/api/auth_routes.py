"""Account endpoints.

    POST   /api/auth/register  -- create account
    POST   /api/auth/login     -- verify credentials, set session cookie
    POST   /api/auth/logout    -- clear session cookie
    GET    /api/auth/me        -- current user and preferences
    PUT    /api/auth/profile   -- update name / avatar
    PUT    /api/auth/password  -- change password
    DELETE /api/auth/account   -- delete account and everything it owns
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..actions import auth_actions
from ..core.auth import SessionContext, optional_session
from ..database import get_db
from ..exceptions import AuthenticationError
from ..schemas.user import LoginRequest, MeResponse, PasswordChange, ProfileUpdate, RegisterRequest
from .responses import action_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register")
def register(body: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    result = auth_actions.register_user(db, body.name, body.email, body.password)
    return action_response(response, result, success_status=201)


@router.post("/login")
def login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Authenticate with email and password.

    On success the session token is set as an HTTP-only cookie and also
    returned in the body for API clients using a Bearer header.
    """
    result = auth_actions.sign_in(db, response, body.email, body.password)
    return action_response(response, result)


@router.post("/logout")
def logout(response: Response):
    return action_response(response, auth_actions.sign_out(response))


@router.get("/me", response_model=MeResponse)
def me(
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    current = auth_actions.get_current_user(db, session)
    if current is None:
        raise AuthenticationError()
    return current


@router.put("/profile")
def update_profile(
    body: ProfileUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    result = auth_actions.update_user_profile(db, session, name=body.name, image=body.image)
    return action_response(response, result)


@router.put("/password")
def change_password(
    body: PasswordChange,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    result = auth_actions.update_user_password(db, session, body.current_password, body.new_password)
    return action_response(response, result)


@router.delete("/account")
def delete_account(
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    result = auth_actions.delete_user_account(db, session, response)
    return action_response(response, result)
