"""
repositories/profile_repo.py
-----------------------------
Data access layer for profile records.
"""

from typing import Optional

from psycopg2.extras import Json

from db.connection import Database
from models.profile import Profile
from utils.logger import get_logger

logger = get_logger(__name__)


class ProfileRepository:
    """Repository for CRUD operations on the profiles table."""

    def __init__(self, db: Database):
        self.db = db

    def ensure(
        self,
        user_id: str,
        email: str,
        display_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Profile:
        """
        Insert a profile if it doesn't exist, or refresh the existing record.
        Uses PostgreSQL's ON CONFLICT (upsert) for atomicity.

        Args:
            user_id: The identity provider's user id.
            email: Email address from the identity provider.
            display_name: Optional display name; an existing one is kept when None.
            avatar_url: Optional avatar; an existing one is kept when None.

        Returns:
            The stored Profile.
        """
        sql = """
            INSERT INTO profiles (id, email, display_name, avatar_url)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (id) DO UPDATE
            SET email = EXCLUDED.email,
                display_name = COALESCE(EXCLUDED.display_name, profiles.display_name),
                avatar_url = COALESCE(EXCLUDED.avatar_url, profiles.avatar_url),
                updated_at = NOW()
            RETURNING *;
        """
        with self.db.connection() as conn:
            try:
                with self.db.dict_cursor(conn) as cur:
                    cur.execute(sql, (user_id, email, display_name, avatar_url))
                    row = cur.fetchone()
                conn.commit()
                logger.info(f"Ensured profile {user_id}")
                return Profile.from_row(row)
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to ensure profile {user_id}: {e}")
                raise

    def get(self, user_id: str) -> Optional[Profile]:
        """
        Fetch a profile by id.

        Returns:
            Profile or None.
        """
        sql = "SELECT * FROM profiles WHERE id = %s;"
        with self.db.connection() as conn:
            with self.db.dict_cursor(conn) as cur:
                cur.execute(sql, (user_id,))
                row = cur.fetchone()
                return Profile.from_row(row) if row else None

    def update(self, user_id: str, changes: dict) -> Optional[Profile]:
        """
        Patch a profile and refresh `updated_at`.

        Columns missing from `changes`, or set to None, keep their stored value.
        A supplied `onboarding_metadata` replaces the whole stored document.

        Returns:
            The updated Profile, or None if no profile has that id.
        """
        metadata = changes.get("onboarding_metadata")
        sql = """
            UPDATE profiles
            SET email = COALESCE(%s, email),
                display_name = COALESCE(%s, display_name),
                avatar_url = COALESCE(%s, avatar_url),
                onboarding_metadata = COALESCE(%s::jsonb, onboarding_metadata),
                updated_at = NOW()
            WHERE id = %s
            RETURNING *;
        """
        with self.db.connection() as conn:
            try:
                with self.db.dict_cursor(conn) as cur:
                    cur.execute(sql, (
                        changes.get("email"),
                        changes.get("display_name"),
                        changes.get("avatar_url"),
                        Json(metadata) if metadata is not None else None,
                        user_id,
                    ))
                    row = cur.fetchone()
                conn.commit()
                if row is None:
                    return None
                logger.info(f"Updated profile {user_id}")
                return Profile.from_row(row)
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to update profile {user_id}: {e}")
                raise
