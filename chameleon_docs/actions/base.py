"""Shared plumbing for server actions.

An action never raises to its caller. Domain exceptions become a failed
``ActionResult`` carrying the exception's message; database errors are
logged with traceback, rolled back and reported with the action's generic
failure message. Read actions fall back to an empty value instead.
"""

import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.auth import SessionContext
from ..exceptions import ChameleonException, ErrorCode
from ..schemas.action import ActionResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNAUTHORIZED = "Unauthorized"

_STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR.value: 400,
    ErrorCode.UNAUTHORIZED.value: 401,
    ErrorCode.FORBIDDEN.value: 403,
    ErrorCode.PROJECT_NOT_FOUND.value: 404,
    ErrorCode.PAGE_NOT_FOUND.value: 404,
    ErrorCode.USER_NOT_FOUND.value: 404,
    ErrorCode.DUPLICATE_SLUG.value: 409,
    ErrorCode.EMAIL_IN_USE.value: 409,
    ErrorCode.RATE_LIMITED.value: 429,
}


def status_for(result: ActionResult) -> int:
    """HTTP status for an action result (200 on success)."""
    if result.success:
        return 200
    return _STATUS_BY_CODE.get(result.error_code or "", 500)


def unauthorized() -> ActionResult:
    return ActionResult.fail(UNAUTHORIZED, ErrorCode.UNAUTHORIZED.value)


def is_signed_in(session: Optional[SessionContext]) -> bool:
    return session is not None and bool(session.email)


def run_action(db: Session, operation: Callable[[], ActionResult], failure_message: str) -> ActionResult:
    """Run a mutating action body, converting every failure into a result."""
    try:
        return operation()
    except ChameleonException as e:
        db.rollback()
        if e.status_code >= 500:
            logger.error(failure_message, extra={"error_code": e.error_code.value})
            return ActionResult.fail(failure_message, e.error_code.value)
        return ActionResult.fail(e.message, e.error_code.value)
    except SQLAlchemyError:
        logger.exception(failure_message)
        db.rollback()
        return ActionResult.fail(failure_message, ErrorCode.DATABASE_ERROR.value)


def run_read(db: Session, operation: Callable[[], T], default: T, description: str) -> T:
    """Run a read action body; not-found and database errors yield *default*."""
    try:
        return operation()
    except ChameleonException as e:
        db.rollback()
        logger.debug(description, extra={"error_code": e.error_code.value})
        return default
    except SQLAlchemyError:
        logger.exception(description)
        db.rollback()
        return default
