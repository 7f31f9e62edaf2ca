"""Business logic services."""

from .analytics_service import AnalyticsService
from .page_service import PageService
from .project_service import ProjectService

__all__ = ["AnalyticsService", "PageService", "ProjectService"]
