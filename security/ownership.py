"""
security/ownership.py
----------------------
Row-level authorization for writes.

Every write that targets an existing row filters on both the row id and the
caller's user id. A write that matched nothing therefore means either "no such
row" or "someone else's row"; both are reported the same way so a caller
cannot probe for other users' records.
"""

from typing import Optional, TypeVar

from handlers.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def require_owned(row: Optional[T], message: str) -> T:
    """
    Pass through a row returned by an owner-scoped query.

    Args:
        row: Result of the query; None when nothing matched.
        message: Client-facing message for the not-found case.

    Raises:
        NotFoundError: If `row` is None.
    """
    if row is None:
        logger.info(f"Ownership check failed: {message}")
        raise NotFoundError(message)
    return row
