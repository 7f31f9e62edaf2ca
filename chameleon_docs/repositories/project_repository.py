"""Project repository."""

from typing import List, Optional

from ..exceptions import ProjectNotFoundError
from ..models import Project
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model_class = Project
    id_column = "slug"
    not_found_error = ProjectNotFoundError

    def get_by_slug(self, slug: str) -> Optional[Project]:
        return self.db.query(Project).filter(Project.slug == slug).first()

    def get_owned(self, slug: str, owner_email: str) -> Project:
        """Project with *slug* owned by *owner_email*.

        Raises ProjectNotFoundError for both missing and foreign projects so
        non-owners cannot probe for existence.
        """
        project = (
            self.db.query(Project)
            .filter(Project.slug == slug, Project.owner_email == owner_email)
            .first()
        )
        if project is None:
            raise ProjectNotFoundError(slug)
        return project

    def slug_exists(self, slug: str) -> bool:
        return self.db.query(Project.id).filter(Project.slug == slug).first() is not None

    def list_by_owner(self, owner_email: str) -> List[Project]:
        """Owner's projects, most recently updated first."""
        return (
            self.db.query(Project)
            .filter(Project.owner_email == owner_email)
            .order_by(Project.updated_at.desc())
            .all()
        )

    def delete_by_owner(self, owner_email: str) -> int:
        return (
            self.db.query(Project)
            .filter(Project.owner_email == owner_email)
            .delete(synchronize_session=False)
        )
