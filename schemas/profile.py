"""Pydantic schemas for profile request bodies."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from schemas.idea import NonEmptyStr


class CreateProfileBody(BaseModel):
    """Body of POST /createProfile, sent right after sign-up."""

    userId: NonEmptyStr = Field(description="Identity provider's user id")
    email: NonEmptyStr
    displayName: Optional[str] = None
    avatarUrl: Optional[str] = None


class UpdateProfileBody(BaseModel):
    """Body of PUT /updateProfile.

    All fields are optional for partial updates. onboardingMetadata replaces
    the stored document when present.
    """

    email: Optional[NonEmptyStr] = None
    displayName: Optional[str] = None
    avatarUrl: Optional[str] = None
    onboardingMetadata: Optional[dict[str, Any]] = None
