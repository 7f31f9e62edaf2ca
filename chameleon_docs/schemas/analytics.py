"""Analytics schemas."""

from typing import List, Optional

from pydantic import BaseModel


class ViewResult(BaseModel):
    counted: bool
    reason: Optional[str] = None


class TopPage(BaseModel):
    title: str
    slug: str
    views: int


class ProjectAnalytics(BaseModel):
    total_views: int
    top_pages: List[TopPage]


class VisitorCount(BaseModel):
    count: int


class CleanupResult(BaseModel):
    deleted: int
