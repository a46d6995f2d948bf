"""
StoreGate API - Fixed Window Rate Limiter
==========================================

What:  Per-client request counter over fixed, non-overlapping time windows.
How:   Thin wrapper around the `limits` library: a FixedWindowRateLimiter
       strategy over a private MemoryStorage, so every FixedWindowLimiter
       instance counts independently of the others.
Who:   Built by the application factory (one for login, one for /api) and
       consulted by the rate-limit gate in app.middleware.rate_limit.

Algorithm: Fixed Window Counter
    1. The first hit from a client opens a window of `window_seconds`
    2. Each hit in that window increments the client's counter
    3. Once the counter passes `max_requests`, hits are rejected
    4. When the window elapses the counter disappears and a new window opens

    Unlike a sliding window, a client can burst up to 2x the limit across a
    window boundary.

Scope:
    Counters live in process memory. Multi-worker deployments would need a
    shared `limits` storage (e.g. redis://), which is out of scope here.
"""

import logging
import math
import time

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


class FixedWindowLimiter:
    """
    Named fixed-window limiter.

    Attributes:
        name:          Namespace used in the storage keys and in log lines
        max_requests:  Hits allowed per client per window
        window_seconds: Window length
        message_key:   Translation key for the 429 message
    """

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: int,
        message_key: str = "rateLimit.default",
    ):
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message_key = message_key
        self._item = RateLimitItemPerSecond(max_requests, window_seconds, namespace=name)
        self._storage = MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)

    def hit(self, client: str) -> bool:
        """Count one request from client. Returns False when it is over the limit."""
        allowed = self._strategy.hit(self._item, client)
        if not allowed:
            logger.warning(
                "Rate limit '%s' exceeded for %s: more than %d requests in %ds window",
                self.name,
                client,
                self.max_requests,
                self.window_seconds,
            )
        return allowed

    def remaining(self, client: str) -> int:
        return self._strategy.get_window_stats(self._item, client).remaining

    def retry_after(self, client: str) -> int:
        """Whole seconds until the client's current window resets (at least 1)."""
        reset_time = self._strategy.get_window_stats(self._item, client).reset_time
        return max(1, math.ceil(reset_time - time.time()))

    def reset(self) -> None:
        """Forget every counter."""
        self._storage.reset()
