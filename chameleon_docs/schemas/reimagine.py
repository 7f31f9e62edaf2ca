"""Reimagine (AI rewrite) request schema."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReimagineRequest(BaseModel):
    """Body of ``POST /api/reimagine``.

    ``content`` is validated by the route rather than by pydantic so the
    error surfaces as ``{"error": "Content is required"}`` with HTTP 400.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: Any = None
    # "simple" | "technical" | "custom"; unknown modes fall back to technical.
    mode: Optional[str] = None
    prompt: Optional[str] = None
    simplification_level: Optional[str] = Field(default=None, alias="simplificationLevel")
