"""
StoreGate API - JSON Body Middleware
=====================================

What:  Decodes JSON request bodies once, before routing.
How:   For requests declaring Content-Type application/json (or a +json
       suffix) with a non-blank body, the body is decoded and stored on
       request.state.json_body. A body that does not decode is answered
       immediately with 400 invalid_json, so route gates (rate limiting,
       auth) never see it and unknown paths do not turn it into a 404.
       Every other request gets an empty object.
Who:   Applied to every request; RequireFields reads request.state.json_body.
When:  Innermost global middleware, after locale and request id are set, so
       the 400 envelope is localized and carries the request id.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.exceptions import InvalidJsonBodyError
from app.middleware.validation import decode_json
from app.responses import error_response

logger = logging.getLogger(__name__)


def declares_json(request: Request) -> bool:
    media_type = request.headers.get("Content-Type", "").split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


class JSONBodyMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.json_body = {}
        if declares_json(request):
            try:
                request.state.json_body = decode_json(await request.body())
            except InvalidJsonBodyError as exc:
                logger.debug("Malformed JSON body on %s %s", request.method, request.url.path)
                return error_response(request, exc)

        return await call_next(request)
