"""
StoreGate API - Products Routes
================================

What:  GET /api/productos (filtered list) and POST /api/productos (append).

Chains:
    GET   api rate limit → response cache → auth
    POST  api rate limit → auth → permission "escribir" → fields (nombre, precio, categoria)

Filters (all optional, combined with AND):
    categoria   exact, case-sensitive category match
    precio_min  price ≥ value
    precio_max  price ≤ value

An empty price filter is ignored; one that does not start with a number
matches nothing.

Every distinct query string is its own cache entry. POST only invalidates
the bare "/api/productos" entry; filtered entries are left as they are.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from app.dependencies import (
    get_product_repository,
    get_response_cache,
    get_timestamp,
    get_translator,
)
from app.i18n import Translator
from app.middleware.auth import RequirePermission, require_auth
from app.middleware.cache import cache_response
from app.middleware.gates import gated_route
from app.middleware.rate_limit import api_rate_limit
from app.middleware.validation import RequireFields
from app.models.product import Product, parse_price_filter
from app.schemas.common import ErrorResponse
from app.schemas.product import (
    ProductCreate,
    ProductCreatedResponse,
    ProductListResponse,
)
from app.services.auth import Permission
from app.services.repository import Repository
from app.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/api/productos"

router = APIRouter(prefix="/api", tags=["Productos"])


@gated_route(
    router,
    "/productos",
    methods=["GET"],
    gates=[api_rate_limit, cache_response, require_auth],
    response_model=ProductListResponse,
    response_model_exclude_none=True,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
    summary="List products",
)
async def list_products(
    request: Request,
    categoria: Optional[str] = Query(default=None, description="Exact category"),
    precio_min: Optional[str] = Query(default=None, description="Minimum price (inclusive)"),
    precio_max: Optional[str] = Query(default=None, description="Maximum price (inclusive)"),
    products: Repository[Product] = Depends(get_product_repository),
    timestamp: str = Depends(get_timestamp),
) -> ProductListResponse:
    min_price = parse_price_filter(precio_min)
    max_price = parse_price_filter(precio_max)
    items = [
        product
        for product in await products.list()
        if product.matches(category=categoria, min_price=min_price, max_price=max_price)
    ]
    return ProductListResponse(
        productos=items,
        total=len(items),
        filtros=dict(request.query_params),
        timestamp=timestamp,
    )


@gated_route(
    router,
    "/productos",
    methods=["POST"],
    gates=[
        api_rate_limit,
        require_auth,
        RequirePermission(Permission.WRITE),
        RequireFields("nombre", "precio", "categoria"),
    ],
    status_code=201,
    response_model=ProductCreatedResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Write permission required", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
    summary="Create a product",
)
async def create_product(
    payload: ProductCreate,
    products: Repository[Product] = Depends(get_product_repository),
    cache: ResponseCache = Depends(get_response_cache),
    translator: Translator = Depends(get_translator),
    timestamp: str = Depends(get_timestamp),
) -> ProductCreatedResponse:
    product = Product(
        id=await products.next_id(),
        name=payload.name,
        price=payload.price,
        category=payload.category,
        stock=payload.stock,
        created_at=timestamp,
    )
    await products.append(product)
    cache.invalidate(PRODUCTS_PATH)

    logger.info("Created product %d (%s)", product.id, product.name)
    return ProductCreatedResponse(
        mensaje=translator.t("product.created"),
        producto=product,
        timestamp=timestamp,
    )
