"""Route guard middleware: redirects page routes based on session state."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from ..core.auth import decode_session_token, read_session_token
from ..core.route_guard import resolve_route_access
from ..database import SessionLocal
from ..models import User

logger = logging.getLogger(__name__)


def _has_valid_session(request: Request) -> bool:
    payload = decode_session_token(read_session_token(request))
    if payload is None:
        return False
    db = SessionLocal()
    try:
        return db.query(User.id).filter(User.id == payload.sub).first() is not None
    finally:
        db.close()


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Apply ``resolve_route_access`` to every non-API request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path.startswith("/api/"):
            return await call_next(request)

        target = resolve_route_access(path, _has_valid_session(request), request.url.query)
        if target is not None:
            logger.debug("Route guard redirect", extra={"path": path, "target": target})
            return RedirectResponse(url=target, status_code=307)
        return await call_next(request)
