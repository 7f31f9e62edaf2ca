"""API routes."""

from .analytics import router as analytics_router
from .auth_routes import router as auth_router
from .pages import router as pages_router
from .preferences import router as preferences_router
from .projects import router as projects_router
from .reimagine import router as reimagine_router
from .views import router as views_router

__all__ = [
    "analytics_router",
    "auth_router",
    "pages_router",
    "preferences_router",
    "projects_router",
    "reimagine_router",
    "views_router",
]
