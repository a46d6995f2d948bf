"""
StoreGate API - Product Record
===============================

What:  Domain record for an entry in the products collection.
How:   Pydantic model; wire names are the Spanish aliases (nombre, precio,
       categoria, fechaCreacion).
Who:   Stored by the product repository, returned by /api/productos.

Prices are held as floats but written back without a fractional part when
they are whole numbers, so a price sent as 1200 comes back as 1200.
"""

import math
import re
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Leading decimal number, as a lenient float parser reads it: "12.5abc" → 12.5
_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_price_filter(value: Optional[str]) -> Optional[float]:
    """
    Read a precio_min / precio_max query value.

    Absent or empty means no filter. Text without a leading number reads as
    NaN, which no price satisfies.

    >>> parse_price_filter("")
    >>> parse_price_filter("19.90")
    19.9
    >>> parse_price_filter("barato")
    nan
    """
    if not value:
        return None
    match = _LEADING_NUMBER.match(value)
    if match is None:
        return math.nan
    return float(match.group())


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(ge=1)
    name: str = Field(alias="nombre")
    price: float = Field(ge=0, alias="precio")
    category: str = Field(alias="categoria")
    stock: int = Field(default=0, ge=0)
    created_at: Optional[str] = Field(default=None, alias="fechaCreacion")

    @field_serializer("price")
    def serialize_price(self, price: float) -> Union[int, float]:
        return int(price) if float(price).is_integer() else price

    def matches(
        self,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> bool:
        """
        Check the product against the listing filters.

        Category is an exact, case-sensitive match; price bounds are inclusive.
        A filter left as None does not constrain the result, and a NaN bound
        excludes every product.
        """
        if category and self.category != category:
            return False
        if min_price is not None and not self.price >= min_price:
            return False
        if max_price is not None and not self.price <= max_price:
            return False
        return True


SEED_PRODUCTS = [
    Product(id=1, name="Laptop", price=1200, category="Electrónica", stock=5),
    Product(id=2, name="Mouse", price=25, category="Accesorios", stock=20),
    Product(id=3, name="Teclado", price=75, category="Accesorios", stock=15),
]
