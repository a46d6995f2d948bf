# Middleware package init
"""
StoreGate API - Middleware Package
===================================

Two layers of middleware live here.

Global middleware (Starlette, applied to every request):
    Request → [Security Headers] → [CORS] → [GZip] → [Locale]
            → [Request ID + timestamp] → [Logging] → [JSON body] → Router

Route gates (applied per route through app.middleware.gates.GatedRoute):
    GET  /api/*       → [API rate limit] → [Cache] → [Auth] → Handler
    POST /api/*       → [API rate limit] → [Auth] → [Permission] → [Fields] → Handler
    POST /auth/login  → [Login rate limit] → [Fields] → Handler

Gates raise StoreGateError subclasses; the global exception handlers in
app.main render them with the request's translator and timestamp.
"""
