"""
StoreGate API - Access Log Middleware
======================================

What:  One access-log line per HTTP request.
How:   Times the downstream call, then logs the request line (path plus query
       string, since that is the cache key), status, duration, cache outcome,
       response language, authenticated principal and client address.
Who:   Applied to every request via Starlette middleware.
When:  Inside RequestIDMiddleware, so the request id is already known.

Log line:
    GET /api/productos?categoria=Accesorios → 200 in 1.8ms cache=HIT lang=es principal=1 [a1b2c3d4] 127.0.0.1

Level by status:
    5xx → ERROR, 4xx → WARNING (auth failures, rate limits, validation), else INFO

Never logged: request bodies (passwords, user data) and the Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("storegate.access")

# Liveness probes hit this every few seconds
UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def request_line(request: Request) -> str:
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    return f"{request.method} {target}"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        principal = getattr(request.state, "principal", None)
        translator = getattr(request.state, "translator", None)
        fields = {
            "request_id": request_id_var.get(""),
            "request": request_line(request),
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            "cache": response.headers.get("X-Cache", "-"),
            "language": translator.language if translator is not None else "-",
            "principal": principal.id if principal is not None else "-",
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            level_for_status(response.status_code),
            "%(request)s → %(status)d in %(duration_ms).1fms cache=%(cache)s "
            "lang=%(language)s principal=%(principal)s [%(request_id)s] %(client_ip)s",
            fields,
            extra={"access": fields},
        )
        return response
