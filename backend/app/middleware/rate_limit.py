"""
StoreGate API - Rate Limiting Gate
===================================

What:  Route gate rejecting clients that exceed a fixed-window rate limit.
How:   Looks up a named FixedWindowLimiter on app.state.rate_limiters, counts
       the request against the client's IP, and raises RateLimitExceededError
       (429 + Retry-After) once the limit is passed.
Who:   First gate of every /api route and of POST /auth/login.

Limiters (configured in settings, built by create_app):
    login: 5 requests / 15 minutes   → "rateLimit.login" message
    api:   100 requests / 15 minutes → "rateLimit.default" message, shared by
           every /api route

Client identity:
    slowapi's get_remote_address (the socket peer address). Behind a proxy
    this is the proxy's address unless uvicorn runs with --proxy-headers.
"""

from slowapi.util import get_remote_address
from starlette.middleware.base import RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.exceptions import RateLimitExceededError
from app.services.rate_limiter import FixedWindowLimiter


class RateLimitGate:
    """Gate bound to one limiter by name."""

    def __init__(self, limiter_name: str):
        self.limiter_name = limiter_name

    async def __call__(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter: FixedWindowLimiter = request.app.state.rate_limiters[self.limiter_name]
        client_ip = get_remote_address(request)

        if not limiter.hit(client_ip):
            raise RateLimitExceededError(
                message_key=limiter.message_key,
                retry_after=limiter.retry_after(client_ip),
            )

        return await call_next(request)

    def __repr__(self) -> str:
        return f"RateLimitGate({self.limiter_name!r})"


login_rate_limit = RateLimitGate("login")
api_rate_limit = RateLimitGate("api")
