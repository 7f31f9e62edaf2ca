"""Pure route-access rules for the page routes.

``resolve_route_access`` answers one question: given a path and whether the
visitor has a valid session, where (if anywhere) should they be redirected?
The middleware in ``middleware/route_guard.py`` applies the answer.
"""

from typing import Optional
from urllib.parse import urlencode

LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
DASHBOARD_PATH = "/dashboard"

_PROTECTED_PREFIXES = ("/dashboard", "/onboarding")
_GUEST_ONLY_PATHS = frozenset({LOGIN_PATH, SIGNUP_PATH})


def is_protected_path(path: str) -> bool:
    return path.startswith(_PROTECTED_PREFIXES)


def login_redirect(callback_path: str) -> str:
    return f"{LOGIN_PATH}?{urlencode({'callbackUrl': callback_path})}"


def resolve_route_access(path: str, is_logged_in: bool, query: str = "") -> Optional[str]:
    """Return the redirect target for *path*, or ``None`` to let it through.

    >>> resolve_route_access("/dashboard/acme", False)
    '/login?callbackUrl=%2Fdashboard%2Facme'
    >>> resolve_route_access("/login", True)
    '/dashboard'
    >>> resolve_route_access("/p/acme", False) is None
    True
    """
    if is_protected_path(path):
        if is_logged_in:
            return None
        return login_redirect(f"{path}?{query}" if query else path)
    if is_logged_in and path in _GUEST_ONLY_PATHS:
        return DASHBOARD_PATH
    return None
