"""View payloads for the application's page routes.

Each route returns the data its screen needs as JSON. The dashboard and
onboarding routes sit behind the route guard and also require a session
here; ``/login`` and ``/signup`` are only reached by visitors without one.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..actions import analytics_actions, page_actions, preference_actions, project_actions
from ..core.auth import SessionContext, optional_session, require_session
from ..core.revalidation import cached_reader_payload
from ..database import get_db
from ..exceptions import ForbiddenError, PageNotFoundError, ProjectNotFoundError
from ..schemas.page import PageSummary
from ..schemas.project import ProjectResponse
from ..services import PageService, ProjectService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Views"])


def _dump(model) -> Dict[str, Any]:
    return model.model_dump(mode="json")


@router.get("/dashboard")
def dashboard(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_session),
):
    projects = project_actions.get_user_projects(db, session)
    return {
        "user": {"id": session.user_id, "name": session.name, "email": session.email},
        "projects": [_dump(p) for p in projects],
        "onboarding_completed": preference_actions.has_completed_onboarding(db, session),
    }


@router.get("/dashboard/settings")
def dashboard_settings(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_session),
):
    return {
        "user": {"id": session.user_id, "name": session.name, "email": session.email},
        "preferences": preference_actions.get_user_preferences(db, session),
    }


@router.get("/dashboard/{slug}")
def project_hub(
    slug: str,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_session),
):
    """Project overview: pages, view totals and recent visitors. Owner only."""
    project = ProjectService(db).get_owned_project(slug, session.email)
    analytics = analytics_actions.get_project_analytics(db, slug)
    return {
        "project": _dump(ProjectResponse.model_validate(project)),
        "pages": [_dump(p) for p in page_actions.get_project_pages(db, slug)],
        "analytics": _dump(analytics) if analytics is not None else None,
        "recent_visitors": analytics_actions.get_recent_visitors(db, slug),
    }


@router.get("/dashboard/{slug}/editor")
def editor(
    slug: str,
    page: Optional[str] = Query(None, description="Page slug; defaults to the first page"),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_session),
):
    """Editor screen: section board plus the page being edited. Owner only."""
    project = ProjectService(db).get_owned_project(slug, session.email)
    pages = page_actions.get_project_pages(db, slug)
    payload = {
        "project": _dump(ProjectResponse.model_validate(project)),
        "sections": [_dump(s) for s in project_actions.get_project_sections(db, slug)],
        "pages": [_dump(p) for p in pages],
        "active_page": None,
    }
    target = page or (pages[0].slug if pages else None)
    if target is None:
        return payload

    active = page_actions.get_page_content(db, slug, target)
    if active is None:
        raise PageNotFoundError(target)
    payload["active_page"] = _dump(active)
    return payload


@router.get("/onboarding")
def onboarding(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_session),
):
    return {
        "completed": preference_actions.has_completed_onboarding(db, session),
        "preferences": preference_actions.get_user_preferences(db, session),
    }


@router.get("/login")
def login_view():
    return {"view": "login"}


@router.get("/signup")
def signup_view():
    return {"view": "signup"}


def _build_reader_payload(db: Session, slug: str, page_slug: Optional[str]) -> Optional[Dict[str, Any]]:
    project = ProjectService(db).find_project(slug)
    if project is None:
        return None

    page_service = PageService(db)
    pages = page_service.list_pages(slug)
    payload: Dict[str, Any] = {
        "project": _dump(ProjectResponse.model_validate(project)),
        "pages": [_dump(PageSummary.model_validate(p)) for p in pages],
        "active_page": None,
        "empty": not pages,
    }
    if not pages:
        return payload

    target = page_slug or pages[0].slug
    active = next((p for p in pages if p.slug == target), None)
    if active is not None:
        payload["active_page"] = {
            "id": active.id,
            "title": active.title,
            "slug": active.slug,
            "content": active.content,
            "section": active.section or "",
            "is_published": active.is_published,
        }
    return payload


@router.get("/p/{slug}")
def reader(
    slug: str,
    page: Optional[str] = Query(None, description="Page slug; defaults to the first page"),
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    """Public reader.

    Unknown project -> 404; private project viewed by anyone but its owner
    -> 403; project without pages -> ``empty: true``; unknown page -> 404.
    """
    cache_key = f"/p/{slug}?page={page}" if page else f"/p/{slug}"
    payload = cached_reader_payload(cache_key, lambda: _build_reader_payload(db, slug, page))
    if payload is None:
        raise ProjectNotFoundError(slug)

    project = payload["project"]
    if not project["is_public"] and (session is None or session.email != project["owner_email"]):
        raise ForbiddenError("Private project")

    if not payload["empty"] and payload["active_page"] is None:
        raise PageNotFoundError(page or "")
    return payload
