"""Pydantic models for catalog records and request/response payloads."""
from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class InvalidNumber(Enum):
    """Marker for a stored numeric value that could not be coerced."""

    INVALID = "invalid"

    def __repr__(self) -> str:
        return "INVALID_NUMBER"


INVALID_NUMBER = InvalidNumber.INVALID

# ``None`` means the value is unknown, INVALID_NUMBER means it was unreadable.
Numeric = Union[int, float, None, Literal[InvalidNumber.INVALID]]


class Product(BaseModel):
    """Canonical catalog item, built by :func:`product_search.normalizer.normalize`."""

    model_config = ConfigDict(frozen=True)

    id: Any = None
    name: str = "Unnamed"
    category: str | None = None
    price: Numeric = None
    stock: Numeric = None

    @field_serializer("price", "stock")
    def _serialize_number(self, value: Numeric) -> int | float | None:
        if value is INVALID_NUMBER:
            return None
        return value


class SearchFilter(BaseModel):
    """Validated search constraints. Unset fields impose no constraint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: str | None = None
    min_price: int | float | None = Field(None, alias="minPrice")
    max_price: int | float | None = Field(None, alias="maxPrice")
    in_stock_only: bool | None = Field(None, alias="inStockOnly")

    def as_request(self) -> dict:
        """Render the filter back into the raw request shape it came from."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FieldError(BaseModel):
    field: str
    message: str


class SearchResponse(BaseModel):
    total: int
    items: list[Product]
