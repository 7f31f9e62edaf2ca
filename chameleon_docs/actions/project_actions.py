"""Project actions."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.auth import SessionContext
from ..core.revalidation import revalidate_path
from ..schemas.action import ActionResult
from ..schemas.page import PageSummary, SectionGroup
from ..schemas.project import ProjectResponse
from ..services import ProjectService
from .base import is_signed_in, run_action, run_read, unauthorized

logger = logging.getLogger(__name__)


def _revalidate_project(slug: str) -> None:
    revalidate_path(f"/dashboard/{slug}")
    revalidate_path(f"/p/{slug}")


def create_project(
    db: Session,
    session: Optional[SessionContext],
    name: str,
    description: Optional[str] = None,
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        project = ProjectService(db).create_project(session.email, name, description)
        revalidate_path("/dashboard")
        return ActionResult.ok(slug=project.slug)

    return run_action(db, body, "Failed to create project")


def get_user_projects(db: Session, session: Optional[SessionContext]) -> List[ProjectResponse]:
    if not is_signed_in(session):
        return []
    return run_read(
        db,
        lambda: [
            ProjectResponse.model_validate(p)
            for p in ProjectService(db).list_projects(session.email)
        ],
        [],
        "Error fetching projects",
    )


def get_project_details(db: Session, slug: str) -> Optional[ProjectResponse]:
    return run_read(
        db,
        lambda: ProjectResponse.model_validate(ProjectService(db).get_project(slug)),
        None,
        "Error fetching project",
    )


def get_project_sections(db: Session, slug: str) -> List[SectionGroup]:
    """Pages grouped into sections in display order; ``[]`` for unknown projects."""
    def body() -> List[SectionGroup]:
        return [
            SectionGroup(
                name=name,
                draggable=name != "Uncategorized",
                pages=[PageSummary.model_validate(p) for p in pages],
            )
            for name, pages in ProjectService(db).get_sections(slug)
        ]

    return run_read(db, body, [], "Error fetching sections")


def update_project_settings(
    db: Session,
    session: Optional[SessionContext],
    slug: str,
    color: str,
    font: str,
    is_public: bool,
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        ProjectService(db).update_settings(slug, session.email, color, font, is_public)
        _revalidate_project(slug)
        return ActionResult.ok()

    return run_action(db, body, "Failed to update settings")


def update_section_order(
    db: Session, session: Optional[SessionContext], slug: str, order: List[str]
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        stored = ProjectService(db).update_section_order(slug, session.email, order)
        _revalidate_project(slug)
        return ActionResult.ok(order=stored)

    return run_action(db, body, "Failed to update section order")


def delete_project(db: Session, session: Optional[SessionContext], slug: str) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        ProjectService(db).delete_project(slug, session.email)
        revalidate_path("/dashboard")
        _revalidate_project(slug)
        return ActionResult.ok()

    return run_action(db, body, "Failed to delete project")
