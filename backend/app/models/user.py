"""
StoreGate API - User Record
============================

What:  Domain record for an entry in the users collection.
How:   Pydantic model with English attribute names and the Spanish wire names
       of the public API as aliases (nombre, activo, fechaCreacion).
Who:   Stored by the user repository, returned by /api/usuarios.

Invariants:
    - id is unique and assigned in insertion order (len(collection) + 1)
    - created_at is only set for users created through the API; seed users
      have none and the field is omitted from responses
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(ge=1, description="Sequential identifier")
    name: str = Field(alias="nombre", description="Display name")
    email: str = Field(description="Contact email")
    active: bool = Field(default=True, alias="activo", description="Whether the account is enabled")
    created_at: Optional[str] = Field(
        default=None,
        alias="fechaCreacion",
        description="ISO 8601 timestamp of creation through the API",
    )


SEED_USERS = [
    User(id=1, name="Ana García", email="ana@example.com", active=True),
    User(id=2, name="Carlos López", email="carlos@example.com", active=True),
    User(id=3, name="María Rodríguez", email="maria@example.com", active=False),
]
