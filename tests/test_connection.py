"""Unit tests for the connection pool wrapper."""

import threading
import time
from unittest.mock import MagicMock, patch

import pytest

from db.connection import Database


@pytest.fixture
def pooled_db():
    """A Database whose pool hands out MagicMock connections."""
    with patch("psycopg2.connect", side_effect=lambda *a, **kw: MagicMock()):
        db = Database("postgresql://test", min_conn=1, max_conn=2)
        db.open()
        yield db
        db.close()


class TestDatabase:
    def test_more_borrowers_than_connections_all_succeed(self, pooled_db) -> None:
        db = pooled_db
        lock = threading.Lock()
        active = {"now": 0, "peak": 0}
        errors: list[Exception] = []

        def borrow() -> None:
            try:
                with db.connection():
                    with lock:
                        active["now"] += 1
                        active["peak"] = max(active["peak"], active["now"])
                    time.sleep(0.02)
                    with lock:
                        active["now"] -= 1
            except Exception as e:  # collected for the assertion below
                errors.append(e)

        threads = [threading.Thread(target=borrow) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert errors == []
        assert active["peak"] <= 2

    def test_connection_returned_after_block_raises(self, pooled_db) -> None:
        db = pooled_db

        for _ in range(3):
            with pytest.raises(ValueError):
                with db.connection():
                    raise ValueError("boom")

        with db.connection() as conn:
            assert conn is not None

    def test_borrow_before_open_raises(self) -> None:
        db = Database("postgresql://test")

        with pytest.raises(RuntimeError):
            db.get_connection()
