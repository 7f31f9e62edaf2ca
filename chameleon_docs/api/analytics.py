"""Analytics endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..actions import analytics_actions
from ..database import get_db
from ..middleware.request_context import client_ip
from ..schemas.analytics import CleanupResult, ProjectAnalytics, ViewResult, VisitorCount

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.post("/pages/{page_id}/views", response_model=ViewResult)
def track_view(page_id: str, request: Request, db: Session = Depends(get_db)):
    """Record a view of *page_id* from the calling client."""
    return analytics_actions.increment_page_view(
        db,
        page_id,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent") or None,
    )


@router.get("/projects/{slug}", response_model=Optional[ProjectAnalytics])
def project_analytics(slug: str, db: Session = Depends(get_db)):
    return analytics_actions.get_project_analytics(db, slug)


@router.get("/projects/{slug}/visitors", response_model=VisitorCount)
def recent_visitors(slug: str, db: Session = Depends(get_db)):
    return VisitorCount(count=analytics_actions.get_recent_visitors(db, slug))


@router.post("/cleanup", response_model=CleanupResult)
def cleanup(db: Session = Depends(get_db)):
    """Purge page views older than 24 hours."""
    return CleanupResult(deleted=analytics_actions.cleanup_old_views(db))
