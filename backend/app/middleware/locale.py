"""
StoreGate API - Locale Middleware
==================================

What:  Resolves the response language and attaches a Translator to the request.
How:   Reads Accept-Language, resolves it with app.i18n.resolve_language
       (falling back to settings.default_language), stores the Translator on
       request.state.translator and reports the choice in Content-Language.
Who:   Applied to every request; everything that produces a human-readable
       message reads request.state.translator.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.i18n import DEFAULT_LANGUAGE, Translator, resolve_language


class LocaleMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, default_language: str = DEFAULT_LANGUAGE):
        super().__init__(app)
        self.default_language = default_language

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        language = resolve_language(
            request.headers.get("Accept-Language"), default=self.default_language
        )
        request.state.translator = Translator(language)

        response = await call_next(request)
        response.headers["Content-Language"] = language
        return response
