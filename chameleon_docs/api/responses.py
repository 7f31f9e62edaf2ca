"""Rendering of action results as HTTP responses."""

from fastapi import Response

from ..actions import status_for
from ..schemas.action import ActionResult


def action_response(response: Response, result: ActionResult, success_status: int = 200) -> dict:
    """Set the status on *response* and return the JSON body.

    Unset fields are dropped so a success reads ``{"success": true, ...}``.
    """
    response.status_code = success_status if result.success else status_for(result)
    return result.model_dump(exclude_none=True)
