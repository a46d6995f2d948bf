"""
StoreGate API - Product Request/Response Schemas
=================================================

What:  Body schema for POST /api/productos and the envelopes returned by the
       products routes.

ProductCreate rules:
    nombre     non-empty string
    precio     number ≥ 0 (numeric strings such as "19.90" are accepted)
    categoria  non-empty string
    stock      integer ≥ 0, defaults to 0
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from app.models.product import Product


class ProductCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="nombre", min_length=1)
    price: float = Field(alias="precio", ge=0)
    category: str = Field(alias="categoria", min_length=1)
    stock: int = Field(default=0, ge=0)


class ProductListResponse(BaseModel):
    productos: List[Product]
    total: int
    filtros: Dict[str, str] = Field(description="Query parameters as received")
    timestamp: str


class ProductCreatedResponse(BaseModel):
    mensaje: str
    producto: Product
    timestamp: str
