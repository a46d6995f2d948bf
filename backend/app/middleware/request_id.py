"""
StoreGate API - Request Context Middleware
===========================================

What:  Gives each request a correlation id and a fixed timestamp.
How:   Reuses a client-supplied X-Request-ID or generates a short UUID, stores
       it in a ContextVar and on request.state, and echoes it in the response
       headers. The timestamp (ISO 8601, UTC) is taken once on arrival and
       stored on request.state.timestamp so every body produced for the
       request, success or error, reports the same instant.
Who:   Applied to every request via Starlette middleware.
When:  Before the logging middleware, which reads the request id.
"""

import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request id (read by loggers and
# exception handlers)
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request id and timestamp to each request.

    Behavior:
        1. Use the client's X-Request-ID header if present, else a new UUID prefix
        2. Store it in request_id_var and request.state.request_id
        3. Store the arrival time in request.state.timestamp
        4. Add X-Request-ID to the response
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        request_id_var.set(rid)
        request.state.request_id = rid
        request.state.timestamp = utc_timestamp()

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
