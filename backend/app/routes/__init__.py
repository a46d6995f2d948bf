# Routes package init
"""
StoreGate API - API Routes Package
===================================

Route Inventory:
    - root.py:      GET  /                 (service metadata)
    - health.py:    GET  /health           (liveness, uptime, memory)
    - auth.py:      POST /auth/login       (credentials → bearer token)
    - users.py:     GET  /api/usuarios     (list users)
                    POST /api/usuarios     (create user)
    - products.py:  GET  /api/productos    (list/filter products)
                    POST /api/productos    (create product)

Routes stay thin: gates handle rate limiting, caching, auth and required
fields; handlers only read/append through the injected repositories.
"""
