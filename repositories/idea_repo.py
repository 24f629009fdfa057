"""
repositories/idea_repo.py
--------------------------
Data access layer for startup ideas.
All SQL queries related to the `startup_ideas` table live here.
"""

import uuid
from typing import Optional

from db.connection import Database
from models.idea import StartupIdea
from utils.logger import get_logger

logger = get_logger(__name__)


def _as_uuid(value) -> Optional[uuid.UUID]:
    """Parse an idea id; None when it is not a well-formed uuid."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class IdeaRepository:
    """Repository for CRUD operations on the startup_ideas table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, idea: StartupIdea) -> StartupIdea:
        """
        Insert a new idea.

        Args:
            idea: The StartupIdea to persist.

        Returns:
            The stored idea, with `id` and `created_at` filled in by the database.
        """
        sql = """
            INSERT INTO startup_ideas
                (user_id, title, description, category, estimated_revenue, difficulty, time_to_launch)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING *;
        """
        with self.db.connection() as conn:
            try:
                with self.db.dict_cursor(conn) as cur:
                    cur.execute(sql, (
                        idea.user_id, idea.title, idea.description, idea.category,
                        idea.estimated_revenue, idea.difficulty, idea.time_to_launch,
                    ))
                    row = cur.fetchone()
                conn.commit()
                saved = StartupIdea.from_row(row)
                logger.info(f"Added idea #{saved.id} for user {saved.user_id}")
                return saved
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to add idea: {e}")
                raise

    # ── READ ──────────────────────────────────────────────

    def list_for_user(self, user_id: str) -> list[StartupIdea]:
        """
        Fetch every idea owned by a user, newest first.

        Args:
            user_id: Owning profile id.

        Returns:
            List of StartupIdea objects ordered by created_at descending.
        """
        sql = """
            SELECT * FROM startup_ideas
            WHERE user_id = %s
            ORDER BY created_at DESC, id DESC;
        """
        with self.db.connection() as conn:
            with self.db.dict_cursor(conn) as cur:
                cur.execute(sql, (user_id,))
                return [StartupIdea.from_row(r) for r in cur.fetchall()]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, idea_id: str, user_id: str, changes: dict) -> Optional[StartupIdea]:
        """
        Patch an idea owned by `user_id`.

        Columns missing from `changes`, or set to None, keep their stored value.

        Args:
            idea_id: Primary key of the idea.
            user_id: Caller's profile id (security scope).
            changes: Column name -> new value.

        Returns:
            The updated idea, or None if no idea with that id belongs to the user.
        """
        key = _as_uuid(idea_id)
        if key is None:
            return None

        sql = """
            UPDATE startup_ideas
            SET title = COALESCE(%s, title),
                description = COALESCE(%s, description),
                category = COALESCE(%s, category),
                estimated_revenue = COALESCE(%s, estimated_revenue),
                difficulty = COALESCE(%s, difficulty),
                time_to_launch = COALESCE(%s, time_to_launch)
            WHERE id = %s AND user_id = %s
            RETURNING *;
        """
        with self.db.connection() as conn:
            try:
                with self.db.dict_cursor(conn) as cur:
                    cur.execute(sql, (
                        changes.get("title"), changes.get("description"),
                        changes.get("category"), changes.get("estimated_revenue"),
                        changes.get("difficulty"), changes.get("time_to_launch"),
                        key, user_id,
                    ))
                    row = cur.fetchone()
                conn.commit()
                if row is None:
                    return None
                logger.info(f"Updated idea #{idea_id} for user {user_id}")
                return StartupIdea.from_row(row)
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to update idea #{idea_id}: {e}")
                raise

    # ── DELETE ────────────────────────────────────────────

    def delete(self, idea_id: str, user_id: str) -> bool:
        """
        Delete an idea by ID, scoped to a user.

        Returns:
            True if a row was deleted, False otherwise.
        """
        key = _as_uuid(idea_id)
        if key is None:
            return False

        sql = "DELETE FROM startup_ideas WHERE id = %s AND user_id = %s;"
        with self.db.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (key, user_id))
                    deleted = cur.rowcount > 0
                conn.commit()
                if deleted:
                    logger.info(f"Deleted idea #{idea_id} for user {user_id}")
                return deleted
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to delete idea #{idea_id}: {e}")
                raise
