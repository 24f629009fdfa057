"""
db/init_db.py
-------------
Creates the database schema (tables and indexes) if it does not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_STATEMENTS: tuple[str, ...] = (
    # gen_random_uuid() is built in from Postgres 13; older servers need pgcrypto
    "CREATE EXTENSION IF NOT EXISTS pgcrypto",

    # Profiles: keyed by the identity provider's user id
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id                  TEXT PRIMARY KEY,
        email               TEXT UNIQUE NOT NULL,
        display_name        TEXT,
        avatar_url          TEXT,
        onboarding_metadata JSONB DEFAULT '{}'::jsonb,
        created_at          TIMESTAMPTZ DEFAULT NOW(),
        updated_at          TIMESTAMPTZ DEFAULT NOW()
    )
    """,

    # Startup ideas saved by a profile
    """
    CREATE TABLE IF NOT EXISTS startup_ideas (
        id                  UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        user_id             TEXT NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
        title               TEXT NOT NULL,
        description         TEXT NOT NULL,
        category            TEXT NOT NULL,
        estimated_revenue   TEXT NOT NULL,
        difficulty          TEXT NOT NULL CHECK (difficulty IN ('Easy', 'Medium', 'Hard')),
        time_to_launch      TEXT NOT NULL,
        created_at          TIMESTAMPTZ DEFAULT NOW()
    )
    """,

    # Purchased templates: one row per (profile, template)
    """
    CREATE TABLE IF NOT EXISTS user_templates (
        id                  UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        user_id             TEXT NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
        template_id         TEXT NOT NULL,
        purchased_at        TIMESTAMPTZ DEFAULT NOW(),
        UNIQUE (user_id, template_id)
    )
    """,

    "CREATE INDEX IF NOT EXISTS idx_startup_ideas_user_id ON startup_ideas(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_startup_ideas_created_at ON startup_ideas(created_at DESC)",
    "CREATE INDEX IF NOT EXISTS idx_user_templates_user_id ON user_templates(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_profiles_onboarding_metadata ON profiles USING GIN (onboarding_metadata)",
)


class SchemaInitError(Exception):
    """Raised when the schema could not be created."""


def create_tables(db: Database) -> None:
    """
    Execute every schema statement in a single transaction.
    Safe to call multiple times (uses IF NOT EXISTS).

    Raises:
        SchemaInitError: If any statement fails; nothing is committed.
    """
    with db.connection() as conn:
        try:
            with conn.cursor() as cur:
                for statement in SCHEMA_STATEMENTS:
                    cur.execute(statement)
            conn.commit()
            logger.info("Database schema initialized successfully.")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to initialize schema: {e}")
            raise SchemaInitError("Database initialization failed") from e


if __name__ == "__main__":
    from config import DATABASE_URL

    database = Database(DATABASE_URL)
    database.open()
    try:
        create_tables(database)
    finally:
        database.close()
    print("Database schema created successfully.")
