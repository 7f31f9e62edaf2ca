"""Page mutation endpoints, addressed by page id."""

from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..actions import page_actions
from ..core.auth import SessionContext, optional_session
from ..database import get_db
from ..schemas.page import (
    PageContentUpdate,
    PagePublishUpdate,
    PageSectionUpdate,
    PageSlugUpdate,
    PageTitleUpdate,
)
from .responses import action_response

router = APIRouter(prefix="/api/pages", tags=["Pages"])


@router.put("/{page_id}/content")
def update_content(
    page_id: str,
    body: PageContentUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    """Save page content. Last write wins."""
    return action_response(response, page_actions.update_page_content(db, session, page_id, body.content))


@router.put("/{page_id}/publish")
def publish(
    page_id: str,
    body: PagePublishUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return action_response(response, page_actions.publish_page(db, session, page_id, body.is_published))


@router.put("/{page_id}/section")
def update_section(
    page_id: str,
    body: PageSectionUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return action_response(response, page_actions.update_page_section(db, session, page_id, body.section))


@router.put("/{page_id}/title")
def update_title(
    page_id: str,
    body: PageTitleUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return action_response(response, page_actions.update_page_title(db, session, page_id, body.title))


@router.put("/{page_id}/slug")
def update_slug(
    page_id: str,
    body: PageSlugUpdate,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return action_response(response, page_actions.update_page_slug(db, session, page_id, body.slug))


@router.delete("/{page_id}")
def delete_page(
    page_id: str,
    response: Response,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(optional_session),
):
    return action_response(response, page_actions.delete_page(db, session, page_id))
