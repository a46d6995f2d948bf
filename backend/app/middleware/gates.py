"""
StoreGate API - Per-Route Middleware Chains
============================================

What:  Lets a single route run its own ordered chain of middleware ("gates")
       in front of its handler.
How:   A gate has the same shape as a Starlette dispatch function:

           async def gate(request: Request, call_next) -> Response

       GatedRoute is an APIRoute subclass whose route handler is the FastAPI
       handler wrapped by each gate, first gate outermost. gated(...) builds a
       GatedRoute subclass for one chain; gated_route(...) registers an
       endpoint on a router with that route class.
Who:   Route modules (auth, users, products).

Ordering:
    Gates run before FastAPI resolves parameters and parses the body, in the
    order they are declared. A gate can:
      - raise a StoreGateError to reject the request (global handlers render it)
      - return a Response without calling call_next (e.g. a cache hit)
      - call call_next and post-process the Response it gets back

Example:
    @gated_route(router, "/usuarios", methods=["GET"],
                 gates=[api_rate_limit, cache_response, require_auth])
    async def list_users(...): ...
"""

from typing import Any, Awaitable, Callable, Coroutine, Sequence, Type

from fastapi import APIRouter
from fastapi.routing import APIRoute
from starlette.requests import Request
from starlette.responses import Response

RouteHandler = Callable[[Request], Coroutine[Any, Any, Response]]
Gate = Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]


class GatedRoute(APIRoute):
    """APIRoute that runs `gates` around the generated route handler."""

    gates: Sequence[Gate] = ()

    def get_route_handler(self) -> RouteHandler:
        handler = super().get_route_handler()
        for gate in reversed(self.gates):
            handler = _chain(gate, handler)
        return handler


def _chain(gate: Gate, call_next: RouteHandler) -> RouteHandler:
    async def handler(request: Request) -> Response:
        return await gate(request, call_next)

    return handler


def gated(*gates: Gate) -> Type[APIRoute]:
    """Build an APIRoute class that runs the given gates in order."""
    return type("GatedRoute", (GatedRoute,), {"gates": tuple(gates)})


def gated_route(
    router: APIRouter,
    path: str,
    *,
    methods: Sequence[str],
    gates: Sequence[Gate] = (),
    **kwargs: Any,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator registering an endpoint on router behind a gate chain."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        router.add_api_route(
            path,
            func,
            methods=list(methods),
            route_class_override=gated(*gates),
            **kwargs,
        )
        return func

    return decorator
