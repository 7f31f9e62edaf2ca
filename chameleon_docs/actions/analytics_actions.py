"""Analytics actions."""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.revalidation import revalidate_path
from ..exceptions import ChameleonException
from ..schemas.analytics import ProjectAnalytics, ViewResult
from ..services import AnalyticsService
from .base import run_read

logger = logging.getLogger(__name__)


def increment_page_view(
    db: Session,
    page_id: str,
    ip_address: str,
    user_agent: Optional[str] = None,
) -> ViewResult:
    """Fire-and-forget view tracking. Never raises."""
    try:
        result = AnalyticsService(db).record_view(page_id, ip_address, user_agent)
    except ChameleonException as e:
        logger.warning("View for unknown page", extra={"page_id": page_id, "error_code": e.error_code.value})
        db.rollback()
        return ViewResult(counted=False, reason="error")
    except SQLAlchemyError:
        logger.exception("Failed to track view", extra={"page_id": page_id})
        db.rollback()
        return ViewResult(counted=False, reason="error")

    if result["counted"]:
        revalidate_path("/dashboard")
    return ViewResult(**result)


def get_project_analytics(db: Session, slug: str) -> Optional[ProjectAnalytics]:
    return run_read(
        db,
        lambda: ProjectAnalytics(**AnalyticsService(db).project_analytics(slug)),
        None,
        "Error fetching analytics",
    )


def get_recent_visitors(db: Session, slug: str) -> int:
    return run_read(
        db,
        lambda: AnalyticsService(db).recent_visitors(slug),
        0,
        "Failed to get recent visitors",
    )


def cleanup_old_views(db: Session) -> int:
    return run_read(
        db,
        lambda: AnalyticsService(db).cleanup_expired(),
        0,
        "Failed to cleanup old views",
    )
