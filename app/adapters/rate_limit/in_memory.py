"""In-memory sliding-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: a lock serializes the check-and-record step, so concurrent
  requests for one key can never admit more than ``limit`` per window.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter


def _now_ms() -> int:
    return int(time.time() * 1000)


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter keeping the exact request timestamps of each key.

    A request is admitted when fewer than ``limit`` admitted requests for the
    same key fall within the trailing ``window_ms`` milliseconds. Unlike a
    fixed-window counter there is no burst at window boundaries.

    Stale timestamps are pruned lazily, and only when a request is admitted:
    a rejected check leaves the stored timestamps untouched.

    Keys are never forgotten unless ``max_keys`` is set, in which case the
    key whose last admitted request is oldest is evicted once the bound is
    exceeded. Rejections do not refresh a key's position, so a client that is
    only being rejected can be evicted while still inside its window and
    start over with a full quota.
    """

    def __init__(
        self,
        *,
        limit: int = 100,
        window_ms: int = 60_000,
        clock: Callable[[], int] = _now_ms,
        max_keys: int | None = None,
    ) -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum admitted requests per window (0 rejects everything).
            window_ms: Trailing window length in milliseconds.
            clock: Time source returning UNIX time in milliseconds.
            max_keys: Optional bound on tracked keys (None for unbounded).

        Raises:
            ValueError: If limit, window_ms or max_keys are invalid.
        """
        if limit < 0:
            raise ValueError("limit must be >= 0")
        if window_ms < 1:
            raise ValueError("window_ms must be >= 1")
        if max_keys is not None and max_keys < 1:
            raise ValueError("max_keys must be >= 1")

        self._limit = limit
        self._window_ms = window_ms
        self._clock = clock
        self._max_keys = max_keys
        self._lock = threading.Lock()
        self._requests: OrderedDict[str, list[int]] = OrderedDict()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_ms(self) -> int:
        return self._window_ms

    def can_make_request(self, key: str) -> bool:
        now = self._clock()

        with self._lock:
            timestamps = self._requests.get(key, [])
            valid = [ts for ts in timestamps if now - ts < self._window_ms]

            if len(valid) >= self._limit:
                return False

            valid.append(now)
            self._requests[key] = valid
            self._requests.move_to_end(key)
            self._evict_if_over_capacity_locked()
            return True

    def tracked_keys(self) -> int:
        """Return how many client keys currently hold state."""

        with self._lock:
            return len(self._requests)

    def _evict_if_over_capacity_locked(self) -> None:
        if self._max_keys is None:
            return

        while len(self._requests) > self._max_keys:
            # popitem(last=False) removes the least recently admitted key
            self._requests.popitem(last=False)
