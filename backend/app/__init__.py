"""
StoreGate API - Application Package Initializer
================================================

What: Marks the `app` directory as a Python package.
Who:  Imported by uvicorn (app.main:app), the `storegate` entrypoint and pytest.

Architecture Note:
    Requests pass through two layers of middleware before a thin handler:

    ┌─────────────────────────────────────┐
    │     Global middleware (Starlette)   │  ← headers, CORS, locale, request id, logs
    ├─────────────────────────────────────┤
    │     Route gates (per route chain)   │  ← rate limit, cache, auth, permission, fields
    ├─────────────────────────────────────┤
    │          Routes (API Layer)         │  ← read/append, shape the response
    ├─────────────────────────────────────┤
    │   Services (cache, limiters, auth,  │
    │   in-memory repositories)           │  ← process-lifetime state on app.state
    └─────────────────────────────────────┘

    All state lives in memory and is lost on restart.
"""

__version__ = "1.0.0"
