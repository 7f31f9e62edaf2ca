"""Page operations.

Reads are public (the reader shows any project the visitor may see);
every mutation requires the caller to own the page's project. Pages in a
project the caller does not own are reported as not found.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.slugs import slugify
from ..exceptions import DuplicateSlugError, PageNotFoundError, ValidationError
from ..models import Page, Project
from ..repositories import PageRepository, PageViewRepository, ProjectRepository

logger = logging.getLogger(__name__)

DUPLICATE_PAGE_MESSAGE = "A page with this slug already exists"


class PageService:
    """Page CRUD scoped to projects."""

    def __init__(self, db: Session):
        self.db = db
        self.project_repo = ProjectRepository(db)
        self.page_repo = PageRepository(db)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_pages(self, project_slug: str) -> List[Page]:
        project = self.project_repo.get_by_id(project_slug)
        return self.page_repo.list_for_project(project.id)

    def get_page(self, project_slug: str, page_slug: str) -> Page:
        project = self.project_repo.get_by_id(project_slug)
        page = self.page_repo.get_by_slug(project.id, page_slug)
        if page is None:
            raise PageNotFoundError(page_slug)
        return page

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_page(self, project_slug: str, owner_email: str, title: str, section: str = "") -> Page:
        """Append a draft page with empty content to the project."""
        project = self.project_repo.get_owned(project_slug, owner_email)
        title = (title or "").strip()
        slug = slugify(title)
        if not slug:
            raise ValidationError("Title cannot be empty", field="title")
        if self.page_repo.slug_taken(project.id, slug):
            raise DuplicateSlugError(slug, DUPLICATE_PAGE_MESSAGE)

        page = self.page_repo.add(Page(
            project_id=project.id,
            title=title,
            slug=slug,
            content="",
            section=(section or "").strip(),
            is_published=False,
            order=self.page_repo.next_order(project.id),
        ))
        self._commit_or_duplicate(slug)
        self.db.refresh(page)
        logger.info("Page created", extra={"project": project_slug, "page_slug": slug})
        return page

    def update_content(self, page_id: str, owner_email: str, content: str) -> Tuple[Page, Project]:
        page, project = self._owned_page(page_id, owner_email)
        page.content = content
        self.db.commit()
        return page, project

    def set_published(self, page_id: str, owner_email: str, is_published: bool) -> Tuple[Page, Project]:
        page, project = self._owned_page(page_id, owner_email)
        page.is_published = is_published
        self.db.commit()
        return page, project

    def update_section(self, page_id: str, owner_email: str, section: str) -> Tuple[Page, Project]:
        page, project = self._owned_page(page_id, owner_email)
        page.section = (section or "").strip()
        self.db.commit()
        return page, project

    def update_title(self, page_id: str, owner_email: str, title: str) -> Tuple[Page, Project]:
        if not title or not title.strip():
            raise ValidationError("Title cannot be empty", field="title")
        page, project = self._owned_page(page_id, owner_email)
        page.title = title.strip()
        self.db.commit()
        return page, project

    def update_slug(self, page_id: str, owner_email: str, slug: str) -> Tuple[Page, Project]:
        """Sanitise *slug* and store it if no other page in the project uses it."""
        sanitized = slugify(slug or "")
        if not sanitized:
            raise ValidationError("Slug cannot be empty", field="slug")
        page, project = self._owned_page(page_id, owner_email)
        if self.page_repo.slug_taken(project.id, sanitized, exclude_page_id=page.id):
            raise DuplicateSlugError(sanitized, DUPLICATE_PAGE_MESSAGE)
        page.slug = sanitized
        self._commit_or_duplicate(sanitized)
        return page, project

    def delete_page(self, page_id: str, owner_email: str) -> Project:
        page, project = self._owned_page(page_id, owner_email)
        PageViewRepository(self.db).delete_for_pages([page.id])
        self.page_repo.delete(page)
        self.db.commit()
        logger.info("Page deleted", extra={"project": project.slug, "page_id": page_id})
        return project

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _owned_page(self, page_id: str, owner_email: Optional[str]) -> Tuple[Page, Project]:
        page = self.page_repo.get_by_id(page_id)
        project = page.project
        if project is None or project.owner_email != owner_email:
            raise PageNotFoundError(page_id)
        return page, project

    def _commit_or_duplicate(self, slug: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateSlugError(slug, DUPLICATE_PAGE_MESSAGE)
