"""
models/profile.py
-----------------
Domain model for user profiles.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

# request body key -> column name, for the fields a user may change
PROFILE_FIELDS: dict[str, str] = {
    "email": "email",
    "displayName": "display_name",
    "avatarUrl": "avatar_url",
    "onboardingMetadata": "onboarding_metadata",
}


@dataclass
class Profile:
    """
    Application-level user record.

    Attributes:
        id: The identity provider's user id.
        email: Unique email address.
        display_name: Optional name shown in the UI.
        avatar_url: Optional picture URL.
        onboarding_metadata: Free-form JSON document (onboarding progress etc.).
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last update.
    """
    id: str
    email: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    onboarding_metadata: dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "Profile":
        return cls(
            id=row["id"],
            email=row["email"],
            display_name=row.get("display_name"),
            avatar_url=row.get("avatar_url"),
            onboarding_metadata=row.get("onboarding_metadata") or {},
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
            "onboarding_metadata": self.onboarding_metadata,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
