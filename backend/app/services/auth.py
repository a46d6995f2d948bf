"""
StoreGate API - Authentication & Authorization Services
========================================================

What:  Roles, permissions, the authenticated principal, and the pluggable
       credential check used by the login route and the auth gate.
How:   CredentialVerifier is an abstract interface (same shape as a strategy):
       the application factory installs StaticCredentialVerifier by default,
       which accepts one email/password pair and one bearer token taken from
       settings. PermissionTable maps principal ids to permission sets.
Who:   routes/auth.py (login), middleware/auth.py (auth and permission gates).

Replacing authentication:
    Implement CredentialVerifier (for example with signed tokens) and pass it
    to create_app(credential_verifier=...). Gates and handlers only call
    authenticate(), issue_token() and verify_token().
"""

import secrets
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class Permission(str, Enum):
    READ = "leer"
    WRITE = "escribir"
    ADMIN = "admin"


class Principal(BaseModel):
    """Identity attached to request.state.principal by the auth gate."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    name: str = Field(alias="nombre")
    role: Role


ADMIN_PRINCIPAL = Principal(id=1, name="Admin", role=Role.ADMIN)


class PermissionTable:
    """
    Static principal id → permissions lookup.

    Unknown ids have no permissions at all.
    """

    def __init__(self, grants: Optional[Mapping[int, Iterable[Permission]]] = None):
        if grants is None:
            grants = {ADMIN_PRINCIPAL.id: (Permission.READ, Permission.WRITE, Permission.ADMIN)}
        self._grants: Dict[int, FrozenSet[Permission]] = {
            principal_id: frozenset(perms) for principal_id, perms in grants.items()
        }

    def permissions_for(self, principal: Principal) -> FrozenSet[Permission]:
        return self._grants.get(principal.id, frozenset())

    def allows(self, principal: Principal, permission: Permission) -> bool:
        return permission in self.permissions_for(principal)


class CredentialVerifier(ABC):
    """Checks login credentials and bearer tokens."""

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> Optional[Principal]:
        """Return the principal for a valid email/password pair, else None."""
        ...

    @abstractmethod
    async def issue_token(self, principal: Principal) -> str:
        """Return the bearer token a client should send for this principal."""
        ...

    @abstractmethod
    async def verify_token(self, token: str) -> Optional[Principal]:
        """Return the principal a token belongs to, or None if it is rejected."""
        ...


class StaticCredentialVerifier(CredentialVerifier):
    """
    One hardcoded account and one shared token.

    Comparisons are exact (case-sensitive) and done in constant time.
    """

    def __init__(
        self,
        email: str,
        password: str,
        token: str,
        principal: Principal = ADMIN_PRINCIPAL,
    ):
        self._email = email
        self._password = password
        self._token = token
        self._principal = principal

    async def authenticate(self, email: str, password: str) -> Optional[Principal]:
        email_ok = secrets.compare_digest(email.encode("utf-8"), self._email.encode("utf-8"))
        password_ok = secrets.compare_digest(
            password.encode("utf-8"), self._password.encode("utf-8")
        )
        if email_ok and password_ok:
            return self._principal
        return None

    async def issue_token(self, principal: Principal) -> str:
        return self._token

    async def verify_token(self, token: str) -> Optional[Principal]:
        if secrets.compare_digest(token.encode("utf-8"), self._token.encode("utf-8")):
            return self._principal
        return None
