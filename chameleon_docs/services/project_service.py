"""Project operations: creation with the Introduction page, settings, sections.

Public methods:
    create_project       -- derive slug, create project + Introduction page
    list_projects        -- owner's projects, most recently updated first
    get_project          -- lookup by slug (any owner)
    get_owned_project    -- lookup by slug restricted to the owner
    update_settings      -- theme colour/font and visibility
    get_sections         -- pages grouped into ordered sections
    update_section_order -- persist a section order
    delete_project       -- remove project and its pages
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.slugs import slugify
from ..exceptions import DuplicateSlugError, ValidationError
from ..models import Page, Project
from ..repositories import PageRepository, PageViewRepository, ProjectRepository
from . import section_service

logger = logging.getLogger(__name__)

INTRODUCTION_TITLE = "Introduction"
INTRODUCTION_SLUG = "introduction"
INTRODUCTION_TEMPLATE = "# Welcome to {name}\n\nStart writing your documentation here."
DUPLICATE_PROJECT_MESSAGE = "Project name already exists"


class ProjectService:
    """All project operations behind one interface."""

    def __init__(self, db: Session):
        self.db = db
        self.project_repo = ProjectRepository(db)
        self.page_repo = PageRepository(db)

    def create_project(self, owner_email: str, name: str, description: Optional[str] = None) -> Project:
        """Create a project and its published Introduction page.

        Raises ValidationError when the name yields an empty slug and
        DuplicateSlugError when the slug is taken by any project.
        """
        name = (name or "").strip()
        slug = slugify(name)
        if not slug:
            raise ValidationError("Project name must contain letters or numbers", field="name")
        if self.project_repo.slug_exists(slug):
            raise DuplicateSlugError(slug, DUPLICATE_PROJECT_MESSAGE)

        project = self.project_repo.add(Project(
            name=name,
            slug=slug,
            description=(description or "").strip() or None,
            owner_email=owner_email,
        ))
        self.page_repo.add(Page(
            project_id=project.id,
            title=INTRODUCTION_TITLE,
            slug=INTRODUCTION_SLUG,
            content=INTRODUCTION_TEMPLATE.format(name=name),
            is_published=True,
            order=0,
        ))
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent create of the same slug.
            self.db.rollback()
            raise DuplicateSlugError(slug, DUPLICATE_PROJECT_MESSAGE)

        self.db.refresh(project)
        logger.info("Project created", extra={"slug": slug, "owner": owner_email})
        return project

    def list_projects(self, owner_email: str) -> List[Project]:
        return self.project_repo.list_by_owner(owner_email)

    def get_project(self, slug: str) -> Project:
        return self.project_repo.get_by_id(slug)

    def find_project(self, slug: str) -> Optional[Project]:
        return self.project_repo.get_by_slug(slug)

    def get_owned_project(self, slug: str, owner_email: str) -> Project:
        return self.project_repo.get_owned(slug, owner_email)

    def update_settings(
        self, slug: str, owner_email: str, color: str, font: str, is_public: bool
    ) -> Project:
        project = self.project_repo.get_owned(slug, owner_email)
        project.theme_color = color
        project.theme_font = font
        project.is_public = is_public
        self.db.commit()
        self.db.refresh(project)
        return project

    def get_sections(self, slug: str) -> List[Tuple[str, List[Page]]]:
        project = self.project_repo.get_by_id(slug)
        pages = self.page_repo.list_for_project(project.id)
        return section_service.build_sections(pages, project.section_order or [])

    def update_section_order(self, slug: str, owner_email: str, order: List[str]) -> List[str]:
        """Store *order* without Uncategorized or duplicates; returns what was stored."""
        project = self.project_repo.get_owned(slug, owner_email)
        stored = section_service.persistable_order(order)
        project.section_order = stored
        self.db.commit()
        return list(stored)

    def delete_project(self, slug: str, owner_email: str) -> None:
        project = self.project_repo.get_owned(slug, owner_email)
        page_ids = self.page_repo.ids_for_projects([project.id])
        PageViewRepository(self.db).delete_for_pages(page_ids)
        self.page_repo.delete_for_projects([project.id])
        self.project_repo.delete(project)
        self.db.commit()
        logger.info("Project deleted", extra={"slug": slug, "pages": len(page_ids)})
