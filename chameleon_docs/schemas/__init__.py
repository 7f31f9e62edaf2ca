"""Pydantic schemas for API validation."""

from .action import ActionResult
from .analytics import CleanupResult, ProjectAnalytics, TopPage, ViewResult, VisitorCount
from .page import (
    PageContentUpdate,
    PageCreate,
    PagePublishUpdate,
    PageResponse,
    PageSectionUpdate,
    PageSlugUpdate,
    PageSummary,
    PageTitleUpdate,
    SectionGroup,
)
from .project import ProjectCreate, ProjectResponse, ProjectSettingsUpdate, SectionOrderUpdate
from .reimagine import ReimagineRequest
from .user import (
    DefaultLevelUpdate,
    LoginRequest,
    MeResponse,
    OnboardingAnswers,
    OnboardingStatus,
    PasswordChange,
    PreferencesUpdate,
    ProfileUpdate,
    RegisterRequest,
    SimplificationPreferences,
    UserResponse,
)

__all__ = [
    "ActionResult",
    "CleanupResult",
    "ProjectAnalytics",
    "TopPage",
    "ViewResult",
    "VisitorCount",
    "PageContentUpdate",
    "PageCreate",
    "PagePublishUpdate",
    "PageResponse",
    "PageSectionUpdate",
    "PageSlugUpdate",
    "PageSummary",
    "PageTitleUpdate",
    "SectionGroup",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectSettingsUpdate",
    "SectionOrderUpdate",
    "ReimagineRequest",
    "DefaultLevelUpdate",
    "LoginRequest",
    "MeResponse",
    "OnboardingAnswers",
    "OnboardingStatus",
    "PasswordChange",
    "PreferencesUpdate",
    "ProfileUpdate",
    "RegisterRequest",
    "SimplificationPreferences",
    "UserResponse",
]
