from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from fitgoals.core.constants import MAX_MEASUREMENT


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class GoalFields(BaseModel):
    target_weight: float = Field(..., gt=0, lt=MAX_MEASUREMENT, allow_inf_nan=False)
    target_miles: float = Field(..., gt=0, lt=MAX_MEASUREMENT, allow_inf_nan=False)
    target_streak: int = Field(..., ge=1)


class UserRead(BaseModel):
    """Profile as returned to the frontend."""

    id: int
    email: EmailStr
    username: Optional[str] = None
    profile_picture: Optional[str] = None
    initial_weight: Optional[float] = None
    target_weight: Optional[float] = None
    target_miles: Optional[float] = None
    target_streak: Optional[int] = None
    onboarded: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    session_state: str
    user: UserRead


class OnboardingRequest(GoalFields):
    username: str = Field(..., max_length=50)
    initial_weight: float = Field(..., gt=0, lt=MAX_MEASUREMENT, allow_inf_nan=False)


class ProfileUpdate(BaseModel):
    """Schema for editing a profile (all fields optional)."""

    username: Optional[str] = Field(None, max_length=50)
    initial_weight: Optional[float] = Field(None, gt=0, lt=MAX_MEASUREMENT, allow_inf_nan=False)
    target_weight: Optional[float] = Field(None, gt=0, lt=MAX_MEASUREMENT, allow_inf_nan=False)
    target_miles: Optional[float] = Field(None, gt=0, lt=MAX_MEASUREMENT, allow_inf_nan=False)
    target_streak: Optional[int] = Field(None, ge=1)

    # Be lenient with extra fields from clients
    model_config = ConfigDict(extra="ignore")


class PictureUploadResult(BaseModel):
    profile_picture: Optional[str] = None
    uploaded: bool
    warning: Optional[str] = None
