"""Database models."""

from .user import User
from .project import Project
from .page import Page
from .page_view import PageView

__all__ = ["User", "Project", "Page", "PageView"]
