# Services package init
"""
StoreGate API - Services Layer
===============================

What:  Process-lifetime state shared by the gates and route handlers.
How:   create_app() builds one instance of each and stores it on app.state;
       handlers receive them through app.dependencies.

Service Inventory:
    - ResponseCache: exact-URL → serialized GET body
    - FixedWindowLimiter: per-client request counter over a fixed window
    - CredentialVerifier (abstract) / StaticCredentialVerifier: login + bearer token
    - PermissionTable: principal id → granted permissions
    - Repository (abstract) / InMemoryRepository: append-only users and products
"""
