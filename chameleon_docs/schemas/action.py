"""Result envelope returned by every server action."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ActionResult(BaseModel):
    """``{success, error}``-shaped outcome of a mutating action.

    Extra payload fields (``slug``, ``token`` ...) are allowed so individual
    actions can return what the UI needs next.
    """

    model_config = ConfigDict(extra="allow")

    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, **payload) -> "ActionResult":
        return cls(success=True, **payload)

    @classmethod
    def fail(cls, error: str, error_code: Optional[str] = None) -> "ActionResult":
        return cls(success=False, error=error, error_code=error_code)
