"""
StoreGate API - Response Cache Gate
====================================

What:  Serves GET responses from the shared ResponseCache and fills it on the
       first successful response for a URL.
How:   Wraps the downstream chain: on a hit the stored body is returned
       immediately (nothing after this gate runs); on a miss the response is
       produced normally and its rendered body is captured before it is sent.
Who:   GET /api/usuarios and GET /api/productos, placed after the rate limiter
       and before the auth gate.

Rules:
    - Non-GET requests pass straight through; the cache is not consulted.
    - Only 2xx responses are stored.
    - Hits are replayed byte-for-byte with status 200 and X-Cache: HIT.
    - Write routes call ResponseCache.invalidate() with their list path.
"""

import logging

from starlette.middleware.base import RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)


def cache_key(request: Request) -> str:
    """Exact path plus raw query string, e.g. /api/productos?categoria=Mouse."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


async def cache_response(request: Request, call_next: RequestResponseEndpoint) -> Response:
    if request.method != "GET":
        return await call_next(request)

    cache: ResponseCache = request.app.state.response_cache
    key = cache_key(request)

    cached = cache.lookup(key)
    if cached is not None:
        logger.info("Serving from cache: %s", key)
        return Response(
            content=cached,
            media_type="application/json",
            headers={"X-Cache": "HIT"},
        )

    logger.info("No cached response for %s, running handler", key)
    response = await call_next(request)

    body = getattr(response, "body", None)
    if 200 <= response.status_code < 300 and body is not None:
        cache.store(key, bytes(body))
        response.headers["X-Cache"] = "MISS"

    return response
