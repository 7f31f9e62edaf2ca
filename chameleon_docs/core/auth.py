"""Session authentication: FastAPI dependencies and cookie helpers.

Public interface:
    ``optional_session`` -- SessionContext or None, never raises. Server
                            actions use it and answer "Unauthorized" themselves.
    ``require_session``  -- SessionContext or 401.
    ``start_session``    -- issue a token and set the session cookie.
    ``end_session``      -- clear the session cookie.

A session token is read from the ``chameleon_session`` cookie first, then
from an ``Authorization: Bearer`` header for API clients.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import settings
from .token_factory import TokenPayload, create_token, decode_token
from ..database import get_db
from ..exceptions import AuthenticationError

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionContext:
    """The signed-in user as seen by every endpoint."""

    user_id: str
    email: str
    name: str


def read_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    if credentials is not None:
        return credentials.credentials
    auth_header = request.headers.get("authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip() or None
    return None


def decode_session_token(token: Optional[str]) -> Optional[TokenPayload]:
    """Validate signature and expiry only (no database lookup)."""
    if not token:
        return None
    return decode_token(token, settings.jwt_secret_key, settings.jwt_algorithm)


def optional_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[SessionContext]:
    """Resolve the current session, or None when absent or invalid."""
    payload = decode_session_token(read_session_token(request, credentials))
    if payload is None:
        return None
    return _load_session(payload, db)


def require_session(
    session: Optional[SessionContext] = Depends(optional_session),
) -> SessionContext:
    if session is None:
        raise AuthenticationError()
    return session


def start_session(response: Response, user_id: str, email: str) -> str:
    """Issue a session token for the user and attach it as an HTTP-only cookie."""
    token = create_token(
        subject=user_id,
        email=email,
        secret=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_hours=settings.session_expires_hours,
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_expires_hours * 3600,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )
    return token


def end_session(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def _load_session(payload: TokenPayload, db: Session) -> Optional[SessionContext]:
    """A token only counts while its user still exists."""
    from ..models.user import User

    user = db.query(User).filter(User.id == payload.sub).first()
    if user is None:
        logger.info("Session token refers to a missing user", extra={"user_id": payload.sub})
        return None
    return SessionContext(user_id=user.id, email=user.email, name=user.name)
