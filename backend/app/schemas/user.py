"""
StoreGate API - User Request/Response Schemas
==============================================

What:  Body schema for POST /api/usuarios and the envelopes returned by the
       users routes.
How:   FastAPI validates the body against UserCreate after the required-field
       gate has run; failures surface as 400 validation_error.

UserCreate rules:
    nombre  3-50 characters
    email   syntactically valid address
    activo  boolean, defaults to true
"""

from typing import List

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.user import User


class UserCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="nombre", min_length=3, max_length=50)
    email: EmailStr
    active: bool = Field(default=True, alias="activo")


class UserListResponse(BaseModel):
    usuarios: List[User]
    total: int
    timestamp: str


class UserCreatedResponse(BaseModel):
    mensaje: str
    usuario: User
    timestamp: str
