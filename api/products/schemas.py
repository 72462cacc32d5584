"""
Pydantic schemas for product endpoints.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

# Bounds of the NUMERIC(12, 2) price column.
PRICE_DECIMAL_PLACES = 2
MAX_PRICE = 9_999_999_999.99


class CreateProductRequest(BaseModel):
    name: str = Field(..., min_length=1)
    about: str = Field(..., min_length=1)
    # JSON numbers only: numeric strings and booleans are rejected.
    price: float = Field(..., gt=0, le=MAX_PRICE, strict=True, allow_inf_nan=False)

    @field_validator("price")
    @classmethod
    def _fits_price_column(cls, value: float) -> float:
        exponent = Decimal(str(value)).as_tuple().exponent
        if isinstance(exponent, int) and exponent < -PRICE_DECIMAL_PLACES:
            raise ValueError(f"Price must have at most {PRICE_DECIMAL_PLACES} decimal places.")
        return value


class ProductResponse(BaseModel):
    id: int
    name: str
    about: str
    price: float
