"""Pydantic schemas for the idea generator request body."""

from typing import Optional

from pydantic import BaseModel, Field

from schemas.idea import Difficulty, NonEmptyStr


class UserPreferences(BaseModel):
    preferredDifficulty: Optional[Difficulty] = None
    preferredTimeToLaunch: Optional[str] = None
    preferredMarketSize: Optional[str] = None


class GenerateIdeaBody(BaseModel):
    """Body of POST /generateIdea."""

    interests: list[NonEmptyStr] = Field(min_length=1, description="Topics the user cares about")
    marketTrends: list[str] = Field(default_factory=list)
    userPreferences: Optional[UserPreferences] = None
