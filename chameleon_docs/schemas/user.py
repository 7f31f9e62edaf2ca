"""User and preference schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

TechBackground = Literal["none", "beginner", "intermediate", "advanced", "expert"]
LearningStyle = Literal["visual", "detailed", "examples", "concise"]
DocsExperience = Literal["never", "rarely", "sometimes", "often", "daily"]
ExplanationDepth = Literal["high-level", "moderate", "detailed"]
SimplificationLevel = Literal["technical", "standard", "simplified", "beginner", "noob"]


class RegisterRequest(BaseModel):
    # Presence is checked by the action so a missing field yields
    # "Missing fields" rather than a 422.
    name: str = ""
    email: str = ""
    password: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Ada", "email": "ada@example.com", "password": "correct horse"}]
        }
    }


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    image: Optional[str] = None


class PasswordChange(BaseModel):
    current_password: str = ""
    new_password: str = ""


class SimplificationPreferences(BaseModel):
    """Reading preferences collected at onboarding and editable in settings."""
    tech_background: TechBackground = "beginner"
    primary_role: str = ""
    learning_style: LearningStyle = "detailed"
    experience_with_docs: DocsExperience = "sometimes"
    preferred_explanation_depth: ExplanationDepth = "moderate"
    default_simplification_level: SimplificationLevel = "standard"
    has_completed_onboarding: bool = False


class OnboardingAnswers(BaseModel):
    tech_background: TechBackground
    primary_role: str = ""
    learning_style: LearningStyle
    experience_with_docs: DocsExperience
    preferred_explanation_depth: ExplanationDepth


class PreferencesUpdate(BaseModel):
    """Partial update; unset fields keep their stored value."""
    tech_background: Optional[TechBackground] = None
    primary_role: Optional[str] = None
    learning_style: Optional[LearningStyle] = None
    experience_with_docs: Optional[DocsExperience] = None
    preferred_explanation_depth: Optional[ExplanationDepth] = None
    default_simplification_level: Optional[SimplificationLevel] = None
    has_completed_onboarding: Optional[bool] = None


class DefaultLevelUpdate(BaseModel):
    level: SimplificationLevel


class OnboardingStatus(BaseModel):
    completed: bool


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    image: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MeResponse(BaseModel):
    user: UserResponse
    preferences: SimplificationPreferences = Field(default_factory=SimplificationPreferences)
