"""
models/idea.py
--------------
Domain model for startup ideas saved by a user.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")

# request body key -> column name, for the fields a user may change
IDEA_FIELDS: dict[str, str] = {
    "title": "title",
    "description": "description",
    "category": "category",
    "estimatedRevenue": "estimated_revenue",
    "difficulty": "difficulty",
    "timeToLaunch": "time_to_launch",
}


@dataclass
class StartupIdea:
    """
    Represents a single startup idea.

    Attributes:
        id: Database primary key, a uuid (None for new records).
        user_id: Id of the owning profile.
        title: Short name of the idea.
        description: What the startup does.
        category: Market category (e.g., SaaS, Healthcare).
        estimated_revenue: Free-text revenue label, e.g. "$1k/mo".
        difficulty: One of 'Easy', 'Medium', 'Hard'.
        time_to_launch: Free-text label, e.g. "2 weeks".
        created_at: Timestamp when the record was created.
    """
    user_id: str
    title: str
    description: str
    category: str
    estimated_revenue: str
    difficulty: str  # 'Easy' | 'Medium' | 'Hard'
    time_to_launch: str
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "StartupIdea":
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            user_id=row["user_id"],
            title=row["title"],
            description=row["description"],
            category=row["category"],
            estimated_revenue=row["estimated_revenue"],
            difficulty=row["difficulty"],
            time_to_launch=row["time_to_launch"],
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> dict:
        """Row representation returned to API clients."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "estimated_revenue": self.estimated_revenue,
            "difficulty": self.difficulty,
            "time_to_launch": self.time_to_launch,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
