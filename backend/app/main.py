"""
StoreGate API - FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the services (repositories, response cache, rate
       limiters, credential verifier, permission table), stores them on
       app.state, registers global middleware, exception handlers and routers,
       and returns the app.
Who:   uvicorn (app.main:app), the `storegate` entrypoint, and the test suite
       (which calls create_app() for a fresh instance per test).

Application Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │                        FastAPI App                           │
    │                                                              │
    │  Global middleware:                                          │
    │  Security Headers → CORS → GZip → Locale → Request ID → Log  │
    │  → JSON body (malformed → 400 before any route gate)         │
    │                                                              │
    │  Routes (each with its own gate chain):                      │
    │  GET /   GET /health   POST /auth/login                      │
    │  GET|POST /api/usuarios   GET|POST /api/productos            │
    │                                                              │
    │  Exception handlers:                                         │
    │  StoreGateError → its status │ 404/405 → not_found           │
    │  RequestValidationError → 400 │ anything else → 500          │
    └──────────────────────────────────────────────────────────────┘

app.state:
    settings, response_cache, rate_limiters, credential_verifier,
    permission_table, user_repository, product_repository
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, settings as default_settings
from app.dependencies import get_timestamp, get_translator
from app.exceptions import (
    InvalidJsonBodyError,
    NotFoundError,
    RateLimitExceededError,
    SchemaValidationError,
    StoreGateError,
)
from app.middleware.json_body import JSONBodyMiddleware
from app.middleware.locale import LocaleMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.models.product import SEED_PRODUCTS, Product
from app.models.user import SEED_USERS, User
from app.responses import error_response
from app.routes import auth, health, products, root, users
from app.services.auth import CredentialVerifier, PermissionTable, StaticCredentialVerifier
from app.services.rate_limiter import FixedWindowLimiter
from app.services.repository import InMemoryRepository, Repository
from app.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)

# Shown in 404 responses: (route, translation key of its description)
ROUTE_SUGGESTIONS = [
    ("GET /", "suggestion.root"),
    ("GET /health", "suggestion.health"),
    ("POST /auth/login", "suggestion.login"),
    ("GET /api/usuarios", "suggestion.users"),
    ("GET /api/productos", "suggestion.products"),
]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = default_settings.log_level) -> None:
    """
    Configure application logging.

    Format: 2024-01-15T12:00:00 [INFO] storegate.access: GET /api/usuarios 200 ...
    Output: stdout (container log collectors read it from there).
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings

    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("StoreGate API %s starting up (%s)", __version__, config.environment)

    if not config.is_development and config.api_token == Settings.model_fields["api_token"].default:
        logger.warning("API_TOKEN is the built-in demo token; set API_TOKEN for real deployments")

    logger.info("Server ready at http://%s:%d", config.host, config.port)
    logger.info(
        "Login: POST /auth/login with {\"email\": \"%s\", \"password\": \"...\"}",
        config.admin_email,
    )
    logger.info("=" * 60)

    yield

    logger.info("StoreGate API shutting down...")
    app.state.response_cache.clear()
    for limiter in app.state.rate_limiters.values():
        limiter.reset()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    errors = []
    for error in exc.errors():
        location = error.get("loc", ())
        errors.append(
            {
                "location": str(location[0]) if location else "",
                "field": ".".join(str(part) for part in location[1:]),
                "message": error.get("msg", ""),
            }
        )
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the JSON error envelope.

    Handler hierarchy:
        RateLimitExceededError      → 429 + Retry-After
        StoreGateError (base)       → exc.status_code
        RequestValidationError      → 400 invalid_json / validation_error
        HTTPException 404 / 405     → 404 not_found with route suggestions
        HTTPException (other)       → its own status
        Exception (fallback)        → 500, message detail only in development
    """

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return error_response(request, exc, headers={"Retry-After": str(exc.retry_after)})

    @app.exception_handler(StoreGateError)
    async def handle_app_error(request: Request, exc: StoreGateError):
        if exc.status_code >= 500:
            logger.error("%s on %s %s", exc.code, request.method, request.url.path)
        else:
            logger.debug("%s on %s %s", exc.code, request.method, request.url.path)
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            return error_response(request, InvalidJsonBodyError())
        return error_response(request, SchemaValidationError(_validation_errors(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            translator = get_translator(request)
            suggestions = [f"{route} - {translator.t(key)}" for route, key in ROUTE_SUGGESTIONS]
            path = request.url.path
            if request.url.query:
                path = f"{path}?{request.url.query}"
            not_found = NotFoundError(
                method=request.method,
                path=path,
                context={"suggestions": suggestions},
            )
            return error_response(request, not_found)

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "http_error",
                "message": str(exc.detail),
                "timestamp": get_timestamp(request),
                "request_id": getattr(request.state, "request_id", None),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "Unexpected error on %s %s: %s",
            request.method,
            request.url.path,
            str(exc),
            exc_info=True,
        )
        config: Settings = request.app.state.settings
        if config.is_development:
            reason = str(exc)
        else:
            reason = get_translator(request).t("error.generic")
        return error_response(request, StoreGateError(context={"reason": reason}))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    *,
    credential_verifier: Optional[CredentialVerifier] = None,
    permission_table: Optional[PermissionTable] = None,
    user_repository: Optional[Repository[User]] = None,
    product_repository: Optional[Repository[Product]] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every collaborator can be injected; anything omitted gets the default
    in-process implementation built from `config` (the global settings when
    not given). Each call returns an app with its own cache, counters and
    collections.
    """
    config = config or default_settings

    app = FastAPI(
        title="StoreGate API",
        description=(
            "REST API demonstrating middleware composition: authentication, "
            "authorization, rate limiting, response caching, i18n and input "
            "validation over in-memory users and products."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # ── Services ──────────────────────────────────────────────────────────
    app.state.settings = config
    app.state.response_cache = ResponseCache()
    app.state.rate_limiters = {
        "login": FixedWindowLimiter(
            "login",
            config.login_rate_limit_requests,
            config.login_rate_limit_window,
            message_key="rateLimit.login",
        ),
        "api": FixedWindowLimiter(
            "api",
            config.api_rate_limit_requests,
            config.api_rate_limit_window,
            message_key="rateLimit.default",
        ),
    }
    app.state.credential_verifier = credential_verifier or StaticCredentialVerifier(
        email=config.admin_email,
        password=config.admin_password,
        token=config.api_token,
    )
    app.state.permission_table = permission_table or PermissionTable()
    app.state.user_repository = user_repository or InMemoryRepository("usuarios", SEED_USERS)
    app.state.product_repository = product_repository or InMemoryRepository(
        "productos", SEED_PRODUCTS
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: SecurityHeaders → CORS → GZip → Locale →
    # RequestID → Logging → JSONBody → router
    app.add_middleware(JSONBodyMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(LocaleMiddleware, default_language=config.default_language)
    app.add_middleware(GZipMiddleware, minimum_size=500)

    origins = config.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Cache", "Retry-After", "Content-Language"],
    )

    app.add_middleware(SecurityHeadersMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(products.router)

    return app


app = create_app()
