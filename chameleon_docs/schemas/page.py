"""Page and section schemas."""

from datetime import datetime
from typing import List

from pydantic import BaseModel


class PageCreate(BaseModel):
    title: str = ""
    section: str = ""


class PageContentUpdate(BaseModel):
    content: str


class PagePublishUpdate(BaseModel):
    is_published: bool


class PageSectionUpdate(BaseModel):
    section: str


class PageTitleUpdate(BaseModel):
    title: str = ""


class PageSlugUpdate(BaseModel):
    slug: str = ""


class PageSummary(BaseModel):
    """Navigation entry for a page (no content)."""
    id: str
    title: str
    slug: str
    status: str
    section: str = ""
    order: int = 0
    views: int = 0
    updated_at: datetime

    model_config = {"from_attributes": True}


class PageResponse(BaseModel):
    id: str
    title: str
    slug: str
    content: str
    section: str = ""
    is_published: bool

    model_config = {"from_attributes": True}


class SectionGroup(BaseModel):
    """Pages sharing a section label, in display order."""
    name: str
    draggable: bool
    pages: List[PageSummary] = []
