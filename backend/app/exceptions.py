"""
StoreGate API - Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for every client-visible failure.
How:   Each exception carries an HTTP status, a machine-readable error code, a
       translation key for the human-readable message, and an optional
       context dict. Global exception handlers (registered in main.py) turn
       them into the JSON error envelope, translating the message into the
       request's language.
Who:   Raised by route gates (auth, permissions, validation, rate limiting)
       and route handlers; caught by the global handlers.

Exception Hierarchy:
    StoreGateError (base)
    ├── AuthMissingError             → 401 (no bearer token)
    ├── AuthInvalidError             → 401 (token rejected)
    ├── NotAuthenticatedError        → 401 (no principal on the request)
    ├── InsufficientPermissionsError → 403
    ├── InvalidCredentialsError      → 401 (login failed)
    ├── MissingFieldsError           → 400 (required body fields absent)
    ├── SchemaValidationError        → 400 (body/query failed schema checks)
    ├── InvalidJsonBodyError         → 400 (body is not JSON)
    ├── NotFoundError                → 404 (no route matched)
    └── RateLimitExceededError       → 429

    Anything else that escapes a handler is reported as a 500
    internal_server_error by the catch-all handler.
"""

from typing import Any, Dict, List, Optional


class StoreGateError(Exception):
    """
    Base exception for all StoreGate application errors.

    Attributes:
        status_code:  HTTP status returned to the client
        code:         Machine-readable error code (the "error" field)
        message_key:  Translation key for the "message" field
        context:      Extra details returned under "details"
    """

    status_code: int = 500
    code: str = "internal_server_error"
    message_key: str = "error.internal"

    def __init__(
        self,
        message_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message_key is not None:
            self.message_key = message_key
        self.context = context or {}
        super().__init__(self.message_key)


class AuthMissingError(StoreGateError):
    """Authorization header absent or not using the Bearer scheme."""

    status_code = 401
    code = "auth_missing"
    message_key = "auth.tokenRequired"


class AuthInvalidError(StoreGateError):
    """Bearer token present but not accepted by the credential verifier."""

    status_code = 401
    code = "auth_invalid"
    message_key = "auth.tokenInvalid"


class NotAuthenticatedError(StoreGateError):
    """
    A permission check ran on a request with no principal attached.

    Only reachable when a route declares a permission gate without the auth
    gate in front of it.
    """

    status_code = 401
    code = "not_authenticated"
    message_key = "auth.notAuthenticated"


class InsufficientPermissionsError(StoreGateError):
    status_code = 403
    code = "insufficient_permissions"
    message_key = "auth.insufficientPermissions"

    def __init__(self, required: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["required_permission"] = required
        super().__init__(context=ctx)
        self.required = required


class InvalidCredentialsError(StoreGateError):
    status_code = 401
    code = "invalid_credentials"
    message_key = "auth.invalidCredentials"


class MissingFieldsError(StoreGateError):
    """
    One or more required body fields are absent or falsy.

    Example response:
        {
            "error": "missing_fields",
            "message": "Campos requeridos faltantes",
            "details": {"missing_fields": ["precio", "categoria"]},
            ...
        }
    """

    status_code = 400
    code = "missing_fields"
    message_key = "validation.missingFields"

    def __init__(self, missing_fields: List[str]):
        super().__init__(context={"missing_fields": list(missing_fields)})
        self.missing_fields = list(missing_fields)


class SchemaValidationError(StoreGateError):
    """Body or query values present but rejected by their pydantic schema."""

    status_code = 400
    code = "validation_error"
    message_key = "validation.invalidFields"

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__(context={"errors": errors})
        self.errors = errors


class InvalidJsonBodyError(StoreGateError):
    status_code = 400
    code = "invalid_json"
    message_key = "error.invalidJson"


class NotFoundError(StoreGateError):
    """No route matches the request's method and path."""

    status_code = 404
    code = "not_found"
    message_key = "error.notFound"

    def __init__(self, method: str, path: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["method"] = method
        ctx["path"] = path
        super().__init__(context=ctx)


class RateLimitExceededError(StoreGateError):
    """
    Raised when a client exceeds a fixed-window rate limit.

    The message key is chosen by the limiter that rejected the request, so
    the login limiter and the API limiter can explain themselves differently.
    """

    status_code = 429
    code = "rate_limit_exceeded"
    message_key = "rateLimit.default"

    def __init__(
        self,
        message_key: Optional[str] = None,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message_key=message_key, context=ctx)
        self.retry_after = retry_after
