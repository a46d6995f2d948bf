"""
StoreGate API - FastAPI Dependencies
=====================================

What:  Accessors for the per-application services and per-request context.
How:   The application factory puts services on app.state; middleware puts
       the translator and timestamp on request.state. Handlers declare these
       functions with Depends() instead of importing globals.
"""

from fastapi import Request

from app.i18n import Translator
from app.middleware.request_id import utc_timestamp
from app.models.product import Product
from app.models.user import User
from app.services.auth import CredentialVerifier
from app.services.repository import Repository
from app.services.response_cache import ResponseCache


def get_translator(request: Request) -> Translator:
    translator = getattr(request.state, "translator", None)
    if translator is None:
        translator = Translator(request.app.state.settings.default_language)
    return translator


def get_timestamp(request: Request) -> str:
    return getattr(request.state, "timestamp", None) or utc_timestamp()


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.response_cache


def get_user_repository(request: Request) -> Repository[User]:
    return request.app.state.user_repository


def get_product_repository(request: Request) -> Repository[Product]:
    return request.app.state.product_repository


def get_credential_verifier(request: Request) -> CredentialVerifier:
    return request.app.state.credential_verifier
