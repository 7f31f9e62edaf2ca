"""Custom exception hierarchy for Chameleon Docs."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Not-found errors
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Uniqueness errors
    DUPLICATE_SLUG = "DUPLICATE_SLUG"
    EMAIL_IN_USE = "EMAIL_IN_USE"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Auth & rate limiting
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    RATE_LIMITED = "RATE_LIMITED"

    # Hosted model failures
    UPSTREAM_ERROR = "UPSTREAM_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"


class ChameleonException(Exception):
    """
    Base exception for all Chameleon Docs errors.

    Provides structured error responses with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class ProjectNotFoundError(ChameleonException):
    """Project not found, or not owned by the caller."""

    def __init__(self, slug: str):
        super().__init__(
            "Project not found",
            ErrorCode.PROJECT_NOT_FOUND,
            status_code=404,
            details={"slug": slug}
        )


class PageNotFoundError(ChameleonException):
    """Page not found in database."""

    def __init__(self, page_id: str):
        super().__init__(
            "Page not found",
            ErrorCode.PAGE_NOT_FOUND,
            status_code=404,
            details={"page_id": page_id}
        )


class UserNotFoundError(ChameleonException):
    """User not found in database."""

    def __init__(self, identifier: str):
        super().__init__(
            "User not found",
            ErrorCode.USER_NOT_FOUND,
            status_code=404,
            details={"user": identifier}
        )


class DuplicateSlugError(ChameleonException):
    """A project or page with the derived slug already exists."""

    def __init__(self, slug: str, message: str):
        super().__init__(
            message,
            ErrorCode.DUPLICATE_SLUG,
            status_code=409,
            details={"slug": slug}
        )


class EmailInUseError(ChameleonException):
    """Registration with an email that already has an account."""

    def __init__(self):
        super().__init__(
            "Email already in use",
            ErrorCode.EMAIL_IN_USE,
            status_code=409,
        )


class ValidationError(ChameleonException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class AuthenticationError(ChameleonException):
    """Request lacks a valid session."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class ForbiddenError(ChameleonException):
    """Authenticated user may not see the requested resource."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(
            message,
            ErrorCode.FORBIDDEN,
            status_code=403,
        )


class UpstreamError(ChameleonException):
    """The hosted language model failed or is not configured."""

    def __init__(self, message: str = "Failed to process content", original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["original_error"] = type(original_error).__name__
        super().__init__(
            message,
            ErrorCode.UPSTREAM_ERROR,
            status_code=500,
            details=details
        )
