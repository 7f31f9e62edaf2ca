"""Project schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    name: str = Field("", description="Human-readable project name; the slug is derived from it")
    description: Optional[str] = None

    model_config = {
        "json_schema_extra": {"examples": [{"name": "Acme API", "description": "Public API reference"}]}
    }


class ProjectSettingsUpdate(BaseModel):
    color: str
    font: str
    is_public: bool


class SectionOrderUpdate(BaseModel):
    order: List[str]


class ProjectResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    owner_email: str
    is_public: bool
    emoji: str
    theme_color: str
    theme_font: str
    section_order: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
