"""
StoreGate API - Required Fields Gate
=====================================

What:  Rejects requests whose JSON body lacks any of a route's required fields.
How:   Reuses the body JSONBodyMiddleware already decoded into
       request.state.json_body (reading it directly only when the gate runs
       outside the application stack), collects every required field that is
       absent or falsy, and raises MissingFieldsError listing them in
       declaration order.
Who:   POST /auth/login, POST /api/usuarios, POST /api/productos.

Falsy means what it means in Python: None, "", 0, False, [] and {} all count
as missing. A price of 0 therefore fails the presence check.

Type and format checks (email syntax, numeric price) are not done here; the
pydantic request schemas run after this gate.
"""

import json
from typing import Any

from starlette.middleware.base import RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.exceptions import InvalidJsonBodyError, MissingFieldsError


def decode_json(raw: bytes) -> Any:
    """Decoded JSON document; an empty or blank body decodes as {}."""
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise InvalidJsonBodyError(context={"reason": str(exc)}) from exc


async def read_json_body(request: Request) -> Any:
    if hasattr(request.state, "json_body"):
        return request.state.json_body
    return decode_json(await request.body())


class RequireFields:
    """Gate requiring truthy values for the given top-level body fields."""

    def __init__(self, *fields: str):
        self.fields = fields

    async def __call__(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        body = await read_json_body(request)
        if not isinstance(body, dict):
            body = {}

        missing = [field for field in self.fields if not body.get(field)]
        if missing:
            raise MissingFieldsError(missing)

        return await call_next(request)

    def __repr__(self) -> str:
        return f"RequireFields{self.fields!r}"
