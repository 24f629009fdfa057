"""Pydantic schemas for idea request bodies.

Field names are camelCase to match the frontend payloads.
"""

from typing import Annotated, Literal, Optional

from pydantic import BaseModel, Field, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

Difficulty = Literal["Easy", "Medium", "Hard"]


class CreateIdeaBody(BaseModel):
    """Body of POST /createIdea. Every field is required."""

    userId: NonEmptyStr = Field(description="Owning profile id")
    title: NonEmptyStr
    description: NonEmptyStr
    category: NonEmptyStr
    estimatedRevenue: NonEmptyStr = Field(description="Free-text label, e.g. '$1k/mo'")
    difficulty: Difficulty
    timeToLaunch: NonEmptyStr = Field(description="Free-text label, e.g. '2 weeks'")


class UpdateIdeaBody(BaseModel):
    """Body of PUT /updateIdea.

    Only userId is required; omitted or null fields keep their stored value.
    """

    userId: NonEmptyStr = Field(description="Caller's profile id")
    title: Optional[NonEmptyStr] = None
    description: Optional[NonEmptyStr] = None
    category: Optional[NonEmptyStr] = None
    estimatedRevenue: Optional[NonEmptyStr] = None
    difficulty: Optional[Difficulty] = None
    timeToLaunch: Optional[NonEmptyStr] = None
