"""
StoreGate API - Authentication & Permission Gates
==================================================

What:  Route gates that authenticate the caller and enforce permissions.
How:   require_auth reads "Authorization: Bearer <token>", asks the installed
       CredentialVerifier for the matching principal and stores it on
       request.state.principal. RequirePermission checks that principal
       against the PermissionTable on app.state.
Who:   Every /api route uses require_auth; write routes add
       RequirePermission(Permission.WRITE) after it.

Failure modes:
    no header / not "Bearer "   → AuthMissingError (401)
    token rejected              → AuthInvalidError (401)
    permission gate, no principal → NotAuthenticatedError (401)
    permission not granted      → InsufficientPermissionsError (403)
"""

import logging

from starlette.middleware.base import RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.exceptions import (
    AuthInvalidError,
    AuthMissingError,
    InsufficientPermissionsError,
    NotAuthenticatedError,
)
from app.services.auth import CredentialVerifier, Permission, PermissionTable

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


async def require_auth(request: Request, call_next: RequestResponseEndpoint) -> Response:
    header = request.headers.get("Authorization")
    if not header or not header.startswith(BEARER_PREFIX):
        raise AuthMissingError()

    token = header[len(BEARER_PREFIX):]
    verifier: CredentialVerifier = request.app.state.credential_verifier
    principal = await verifier.verify_token(token)
    if principal is None:
        logger.warning("Rejected bearer token on %s %s", request.method, request.url.path)
        raise AuthInvalidError()

    request.state.principal = principal
    return await call_next(request)


class RequirePermission:
    """Gate requiring the authenticated principal to hold one permission."""

    def __init__(self, permission: Permission):
        self.permission = permission

    async def __call__(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        principal = getattr(request.state, "principal", None)
        if principal is None:
            raise NotAuthenticatedError()

        table: PermissionTable = request.app.state.permission_table
        if not table.allows(principal, self.permission):
            logger.warning(
                "Principal %s lacks permission '%s' for %s %s",
                principal.id,
                self.permission.value,
                request.method,
                request.url.path,
            )
            raise InsufficientPermissionsError(required=self.permission.value)

        return await call_next(request)

    def __repr__(self) -> str:
        return f"RequirePermission({self.permission.value!r})"
