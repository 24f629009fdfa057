"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool, since request handlers run in
the web server's worker threads.

A `Database` is built once by the application and handed to every
repository; nothing in this module is global.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool, extras

from utils.logger import get_logger

logger = get_logger(__name__)

# jsonb columns come back as dicts, uuid columns as uuid.UUID
extras.register_uuid()


class Database:
    """Owns a psycopg2 connection pool for one DSN."""

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 5):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: Optional[pool.ThreadedConnectionPool] = None
        # psycopg2 raises PoolError instead of waiting once max_conn are out,
        # so borrowers queue here first
        self._slots = threading.BoundedSemaphore(max_conn)

    def open(self) -> None:
        """
        Initialize the database connection pool.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    def get_connection(self):
        """
        Get a connection from the pool, blocking while all `max_conn`
        connections are borrowed.

        Raises:
            RuntimeError: If the pool has not been opened.
        """
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call open() first.")
        self._slots.acquire()
        try:
            return self._pool.getconn()
        except Exception:
            self._slots.release()
            raise

    def release_connection(self, conn) -> None:
        """Return a connection back to the pool and free its slot."""
        try:
            if self._pool is not None:
                self._pool.putconn(conn)
        finally:
            self._slots.release()

    @contextmanager
    def connection(self) -> Iterator:
        """Borrow a connection for the duration of a `with` block."""
        conn = self.get_connection()
        try:
            yield conn
        finally:
            self.release_connection(conn)

    @staticmethod
    def dict_cursor(conn):
        """Cursor whose rows are dicts keyed by column name."""
        return conn.cursor(cursor_factory=extras.RealDictCursor)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")
