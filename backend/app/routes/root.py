"""
StoreGate API - Service Metadata Route
=======================================

What:  GET / describes the service and lists its public and protected routes.
"""

from fastapi import APIRouter, Depends

from app import __version__
from app.dependencies import get_timestamp, get_translator
from app.i18n import Translator
from app.schemas.common import ServiceInfo

router = APIRouter(tags=["Service"])

PUBLIC_ROUTES = [
    "GET /",
    "GET /health",
    "POST /auth/login",
]

PROTECTED_ROUTES = [
    "GET /api/usuarios",
    "POST /api/usuarios",
    "GET /api/productos",
    "POST /api/productos",
]


@router.get("/", response_model=ServiceInfo, summary="Service metadata")
async def service_info(
    translator: Translator = Depends(get_translator),
    timestamp: str = Depends(get_timestamp),
) -> ServiceInfo:
    return ServiceInfo(
        mensaje=translator.t("service.description"),
        version=__version__,
        timestamp=timestamp,
        rutasPublicas=PUBLIC_ROUTES,
        rutasProtegidas=PROTECTED_ROUTES,
    )
