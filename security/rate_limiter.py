"""
security/rate_limiter.py
-------------------------
Rate limiting to prevent API abuse.
Limits how many requests a caller can make within a time window.
"""

import math
import threading
import time
from typing import Callable

from handlers.errors import RateLimitError
from utils.logger import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Sliding-window limiter keyed by caller.

    Configuration (via .env):
        RATE_LIMIT_REQUESTS: Max requests per window (default: 10).
        RATE_LIMIT_WINDOW_SECONDS: Window duration in seconds (default: 60).

    Behavior:
        - Tracks request timestamps per key (the client address).
        - Keys with no request inside the window are forgotten.
        - If exceeded, raises RateLimitError carrying the seconds until a slot frees up.
    """

    def __init__(self, max_requests: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        # {key: [timestamp1, timestamp2, ...]}, never holds an empty list
        self._timestamps: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def _cleanup(self, now: float) -> None:
        """Remove expired timestamps and drop keys left without any."""
        cutoff = now - self.window_seconds
        for key in list(self._timestamps):
            fresh = [t for t in self._timestamps[key] if t > cutoff]
            if fresh:
                self._timestamps[key] = fresh
            else:
                del self._timestamps[key]

    def hit(self, key: str) -> None:
        """
        Record one request for `key`.

        Raises:
            RateLimitError: If the key already used its budget for the window.
        """
        with self._lock:
            now = self._clock()
            self._cleanup(now)
            stamps = self._timestamps.get(key, [])
            if len(stamps) >= self.max_requests:
                retry_after = max(1, math.ceil(stamps[0] + self.window_seconds - now))
                logger.warning(f"Rate limit hit for {key}")
                raise RateLimitError(retry_after=retry_after)
            self._timestamps[key] = stamps + [now]

    def reset(self) -> None:
        with self._lock:
            self._timestamps.clear()
