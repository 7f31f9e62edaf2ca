"""Project endpoints, including the project's page listing and creation.

Reads answer ``null`` / ``[]`` (HTTP 200) for unknown projects; mutations
answer ``{"success": false, "error": ...}`` with a matching status.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..actions import page_actions, project_actions
from ..core.auth import SessionContext, optional_session
from ..database import get_db
from ..schemas.page import PageCreate, PageResponse, PageSummary, SectionGroup
from ..schemas.project import ProjectCreate, ProjectResponse, ProjectSettingsUpdate, SectionOrderUpdate
from .responses import action_response

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.get("", response_model=List[ProjectResponse])
def list_projects(
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    """The caller's projects, most recently updated first."""
    return project_actions.get_user_projects(db, session)


@router.post("")
def create_project(
    body: ProjectCreate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    result = project_actions.create_project(db, session, body.name, body.description)
    return action_response(response, result, success_status=201)


@router.get("/{slug}", response_model=Optional[ProjectResponse])
def get_project(slug: str, db: Session = Depends(get_db)):
    return project_actions.get_project_details(db, slug)


@router.delete("/{slug}")
def delete_project(
    slug: str,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return action_response(response, project_actions.delete_project(db, session, slug))


@router.put("/{slug}/settings")
def update_settings(
    slug: str,
    body: ProjectSettingsUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    result = project_actions.update_project_settings(
        db, session, slug, body.color, body.font, body.is_public
    )
    return action_response(response, result)


@router.get("/{slug}/sections", response_model=List[SectionGroup])
def get_sections(slug: str, db: Session = Depends(get_db)):
    return project_actions.get_project_sections(db, slug)


@router.put("/{slug}/section-order")
def update_section_order(
    slug: str,
    body: SectionOrderUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return action_response(response, project_actions.update_section_order(db, session, slug, body.order))


@router.get("/{slug}/pages", response_model=List[PageSummary])
def list_pages(slug: str, db: Session = Depends(get_db)):
    return page_actions.get_project_pages(db, slug)


@router.post("/{slug}/pages")
def create_page(
    slug: str,
    body: PageCreate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    result = page_actions.create_page(db, session, slug, body.title, body.section)
    return action_response(response, result, success_status=201)


@router.get("/{slug}/pages/{page_slug}", response_model=Optional[PageResponse])
def get_page(slug: str, page_slug: str, db: Session = Depends(get_db)):
    return page_actions.get_page_content(db, slug, page_slug)
