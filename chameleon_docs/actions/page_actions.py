"""Page actions. Every mutation requires ownership of the page's project."""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.auth import SessionContext
from ..core.revalidation import revalidate_path
from ..schemas.action import ActionResult
from ..schemas.page import PageResponse, PageSummary
from ..services import PageService
from .base import is_signed_in, run_action, run_read, unauthorized


def _revalidate_project(slug: str) -> None:
    revalidate_path(f"/dashboard/{slug}")
    revalidate_path(f"/p/{slug}")


def get_project_pages(db: Session, slug: str) -> List[PageSummary]:
    return run_read(
        db,
        lambda: [PageSummary.model_validate(p) for p in PageService(db).list_pages(slug)],
        [],
        "Error fetching pages",
    )


def get_page_content(db: Session, slug: str, page_slug: str) -> Optional[PageResponse]:
    return run_read(
        db,
        lambda: PageResponse.model_validate(PageService(db).get_page(slug, page_slug)),
        None,
        "Error fetching page",
    )


def create_page(
    db: Session,
    session: Optional[SessionContext],
    slug: str,
    title: str,
    section: str = "",
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        page = PageService(db).create_page(slug, session.email, title, section)
        _revalidate_project(slug)
        return ActionResult.ok(id=page.id, slug=page.slug)

    return run_action(db, body, "Failed to create page")


def update_page_content(
    db: Session, session: Optional[SessionContext], page_id: str, content: str
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        _, project = PageService(db).update_content(page_id, session.email, content)
        revalidate_path(f"/p/{project.slug}")
        return ActionResult.ok()

    return run_action(db, body, "Failed to save")


def publish_page(
    db: Session, session: Optional[SessionContext], page_id: str, is_published: bool
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        page, project = PageService(db).set_published(page_id, session.email, is_published)
        _revalidate_project(project.slug)
        return ActionResult.ok(status=page.status)

    return run_action(db, body, "Failed to update status")


def update_page_section(
    db: Session, session: Optional[SessionContext], page_id: str, section: str
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        page, project = PageService(db).update_section(page_id, session.email, section)
        _revalidate_project(project.slug)
        return ActionResult.ok(section=page.section)

    return run_action(db, body, "Failed to update section")


def update_page_title(
    db: Session, session: Optional[SessionContext], page_id: str, title: str
) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        page, project = PageService(db).update_title(page_id, session.email, title)
        _revalidate_project(project.slug)
        return ActionResult.ok(title=page.title)

    return run_action(db, body, "Failed to update title")


def update_page_slug(
    db: Session, session: Optional[SessionContext], page_id: str, slug: str
) -> ActionResult:
    """Returns the sanitised slug on success."""
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        page, project = PageService(db).update_slug(page_id, session.email, slug)
        _revalidate_project(project.slug)
        return ActionResult.ok(slug=page.slug)

    return run_action(db, body, "Failed to update slug")


def delete_page(db: Session, session: Optional[SessionContext], page_id: str) -> ActionResult:
    if not is_signed_in(session):
        return unauthorized()

    def body() -> ActionResult:
        project = PageService(db).delete_page(page_id, session.email)
        _revalidate_project(project.slug)
        return ActionResult.ok()

    return run_action(db, body, "Failed to delete page")
