"""
StoreGate API - Login Route
============================

What:  POST /auth/login exchanges the admin credentials for the bearer token.
How:   Login rate limit → required fields (email, password) → handler. The
       handler asks the installed CredentialVerifier to authenticate and to
       issue a token.

Request:
    {"email": "admin@example.com", "password": "admin123"}

Responses:
    200 {"token": "mi-token-secreto", "usuario": {"id": 1, "nombre": "Admin", "role": "admin"}, ...}
    400 missing_fields / invalid_json
    401 invalid_credentials
    429 rate_limit_exceeded (6th attempt within 15 minutes from one IP)
"""

import logging

from fastapi import APIRouter, Depends

from app.dependencies import get_credential_verifier, get_timestamp
from app.exceptions import InvalidCredentialsError
from app.middleware.gates import gated_route
from app.middleware.rate_limit import login_rate_limit
from app.middleware.validation import RequireFields
from app.schemas.common import ErrorResponse, LoginRequest, LoginResponse
from app.services.auth import CredentialVerifier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@gated_route(
    router,
    "/login",
    methods=["POST"],
    gates=[login_rate_limit, RequireFields("email", "password")],
    response_model=LoginResponse,
    responses={
        400: {"description": "Missing fields or malformed JSON", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        429: {"description": "Too many login attempts", "model": ErrorResponse},
    },
    summary="Log in and obtain a bearer token",
)
async def login(
    payload: LoginRequest,
    verifier: CredentialVerifier = Depends(get_credential_verifier),
    timestamp: str = Depends(get_timestamp),
) -> LoginResponse:
    principal = await verifier.authenticate(payload.email, payload.password)
    if principal is None:
        logger.warning("Failed login attempt for %s", payload.email)
        raise InvalidCredentialsError()

    logger.info("Principal %s logged in", principal.id)
    return LoginResponse(
        token=await verifier.issue_token(principal),
        usuario=principal,
        timestamp=timestamp,
    )
