"""Data access repositories."""

from .base import BaseRepository
from .user_repository import UserRepository
from .project_repository import ProjectRepository
from .page_repository import PageRepository
from .page_view_repository import PageViewRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ProjectRepository",
    "PageRepository",
    "PageViewRepository",
]
