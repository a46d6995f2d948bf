"""
StoreGate API - Users Routes
=============================

What:  GET /api/usuarios (list) and POST /api/usuarios (append).
How:   Each route runs its own gate chain (see app.middleware.gates), then a
       thin handler working against the injected user repository.

Chains:
    GET   api rate limit → response cache → auth
    POST  api rate limit → auth → permission "escribir" → fields (nombre, email)

Cache interplay:
    The list body is cached under its exact URL. A successful POST appends
    the user and then invalidates "/api/usuarios", so the next list read is
    rendered again and includes the new user. Only the bare list path is
    invalidated; query-string variants keep their entries.
"""

import logging

from fastapi import APIRouter, Depends

from app.dependencies import (
    get_response_cache,
    get_timestamp,
    get_translator,
    get_user_repository,
)
from app.i18n import Translator
from app.middleware.auth import RequirePermission, require_auth
from app.middleware.cache import cache_response
from app.middleware.gates import gated_route
from app.middleware.rate_limit import api_rate_limit
from app.middleware.validation import RequireFields
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.user import UserCreate, UserCreatedResponse, UserListResponse
from app.services.auth import Permission
from app.services.repository import Repository
from app.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)

USERS_PATH = "/api/usuarios"

router = APIRouter(prefix="/api", tags=["Usuarios"])


@gated_route(
    router,
    "/usuarios",
    methods=["GET"],
    gates=[api_rate_limit, cache_response, require_auth],
    response_model=UserListResponse,
    response_model_exclude_none=True,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
    summary="List users",
)
async def list_users(
    users: Repository[User] = Depends(get_user_repository),
    timestamp: str = Depends(get_timestamp),
) -> UserListResponse:
    items = await users.list()
    return UserListResponse(usuarios=items, total=len(items), timestamp=timestamp)


@gated_route(
    router,
    "/usuarios",
    methods=["POST"],
    gates=[
        api_rate_limit,
        require_auth,
        RequirePermission(Permission.WRITE),
        RequireFields("nombre", "email"),
    ],
    status_code=201,
    response_model=UserCreatedResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Write permission required", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    users: Repository[User] = Depends(get_user_repository),
    cache: ResponseCache = Depends(get_response_cache),
    translator: Translator = Depends(get_translator),
    timestamp: str = Depends(get_timestamp),
) -> UserCreatedResponse:
    user = User(
        id=await users.next_id(),
        name=payload.name,
        email=payload.email,
        active=payload.active,
        created_at=timestamp,
    )
    await users.append(user)
    cache.invalidate(USERS_PATH)

    logger.info("Created user %d (%s)", user.id, user.email)
    return UserCreatedResponse(
        mensaje=translator.t("user.created"),
        usuario=user,
        timestamp=timestamp,
    )
