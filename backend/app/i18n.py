"""
StoreGate API - Translations
=============================

What:  Message catalog and the per-request Translator.
How:   resolve_language() picks a language from the Accept-Language header;
       Translator.translate(key) looks the key up in that language's table and
       echoes the key back when no entry exists.
Who:   LocaleMiddleware builds one Translator per request; route handlers and
       exception handlers use it for every human-readable message.

Resolution rule:
    Only the first entry of Accept-Language is considered, and only its
    primary subtag: "en-US,en;q=0.9" → "en". Quality values are ignored.
    Anything unsupported falls back to the configured default language.
"""

from typing import Dict, Optional

DEFAULT_LANGUAGE = "es"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "es": {
        "rateLimit.login": "Demasiados intentos de inicio de sesión desde esta IP, inténtelo de nuevo después de 15 minutos",
        "rateLimit.default": "Demasiadas solicitudes desde esta IP, inténtelo de nuevo más tarde",
        "auth.tokenRequired": "Token de autenticación requerido",
        "auth.tokenInvalid": "Token inválido",
        "auth.notAuthenticated": "Usuario no autenticado",
        "auth.insufficientPermissions": "Permisos insuficientes",
        "auth.invalidCredentials": "Credenciales inválidas",
        "validation.missingFields": "Campos requeridos faltantes",
        "validation.invalidFields": "Los datos enviados no son válidos",
        "user.created": "Usuario creado exitosamente",
        "product.created": "Producto creado exitosamente",
        "error.invalidJson": "JSON inválido en el body de la petición",
        "error.internal": "Error interno del servidor",
        "error.generic": "Algo salió mal",
        "error.notFound": "Ruta no encontrada",
        "service.description": "API REST con FastAPI - Middleware Completo",
        "suggestion.root": "Información general",
        "suggestion.health": "Estado del servidor",
        "suggestion.login": "Autenticación",
        "suggestion.users": "Listar usuarios (requiere auth)",
        "suggestion.products": "Listar productos (requiere auth)",
    },
    "en": {
        "rateLimit.login": "Too many login attempts from this IP, please try again after 15 minutes",
        "rateLimit.default": "Too many requests from this IP, please try again later",
        "auth.tokenRequired": "Authentication token required",
        "auth.tokenInvalid": "Invalid token",
        "auth.notAuthenticated": "User not authenticated",
        "auth.insufficientPermissions": "Insufficient permissions",
        "auth.invalidCredentials": "Invalid credentials",
        "validation.missingFields": "Required fields are missing",
        "validation.invalidFields": "The submitted data is not valid",
        "user.created": "User created successfully",
        "product.created": "Product created successfully",
        "error.invalidJson": "Invalid JSON in request body",
        "error.internal": "Internal server error",
        "error.generic": "Something went wrong",
        "error.notFound": "Route not found",
        "service.description": "REST API with FastAPI - Complete Middleware",
        "suggestion.root": "General information",
        "suggestion.health": "Server status",
        "suggestion.login": "Authentication",
        "suggestion.users": "List users (auth required)",
        "suggestion.products": "List products (auth required)",
    },
}

SUPPORTED_LANGUAGES = frozenset(TRANSLATIONS)


def resolve_language(accept_language: Optional[str], default: str = DEFAULT_LANGUAGE) -> str:
    """
    Pick the response language from an Accept-Language header value.

    >>> resolve_language("en-US,en;q=0.9")
    'en'
    >>> resolve_language("fr-FR")
    'es'
    """
    if not accept_language:
        return default
    preferred = accept_language.split(",")[0].split("-")[0].strip().lower()
    if preferred in TRANSLATIONS:
        return preferred
    return default


class Translator:
    """Key → localized string lookup bound to one language."""

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        if language not in TRANSLATIONS:
            language = DEFAULT_LANGUAGE
        self.language = language
        self._messages = TRANSLATIONS[language]

    def translate(self, key: str) -> str:
        return self._messages.get(key, key)

    # Shorthand used by handlers: translator.t("user.created")
    t = translate

    def __repr__(self) -> str:
        return f"Translator(language={self.language!r})"
