"""
StoreGate API - Response Cache
===============================

What:  In-memory map from request URL to the rendered JSON body of a GET
       response.
How:   The cache gate (app.middleware.cache) looks a key up before running the
       route, and stores the body of the first successful response for a key
       that was not cached yet. Write endpoints invalidate their list route.
Who:   Constructed once by the application factory, kept on app.state and
       shared by every request.

Policy:
    - Key: exact request path, plus "?" and the raw query string when one is
      present. "/api/productos" and "/api/productos?categoria=Accesorios"
      are independent entries.
    - One entry per key; store() overwrites unconditionally (last writer wins).
    - No expiry, no capacity bound, no eviction.

Concurrency:
    The event loop runs one request step at a time, so every method here is
    atomic on its own. lookup-then-store is not: two concurrent misses for
    the same key may both render the route and both store, the later store
    winning. That window is accepted and no lock is taken.
"""

import logging
from typing import Dict, Iterator, Optional

logger = logging.getLogger(__name__)


class ResponseCache:
    """Unbounded key → body store for GET responses."""

    def __init__(self) -> None:
        self._entries: Dict[str, bytes] = {}

    def lookup(self, key: str) -> Optional[bytes]:
        """Return the cached body for key, or None. No side effects."""
        return self._entries.get(key)

    def store(self, key: str, body: bytes) -> None:
        """Insert or overwrite the entry for key."""
        self._entries[key] = body
        logger.debug("Cached response for %s (%d bytes)", key, len(body))

    def invalidate(self, key: str) -> None:
        """Drop the entry for key. Missing keys are ignored."""
        if self._entries.pop(key, None) is not None:
            logger.info("Cache invalidated for %s", key)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
