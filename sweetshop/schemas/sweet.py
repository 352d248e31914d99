"""
Sweet schemas for catalog and stock endpoints.

Wire format is camelCase (``imageUrl``, ``createdAt``); snake_case field
names are accepted on input as well.
"""

from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
)
from pydantic.alias_generators import to_camel

from sweetshop.models.sweet import MAX_STOCK


def _reported_as(message: str) -> WrapValidator:
    """Replace pydantic's constraint errors for a field with one message."""

    def validate(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            raise ValueError(message) from None

    return WrapValidator(validate)


# Finite, non-negative; "NaN" and "Infinity" are rejected
Price = Annotated[
    float,
    Field(ge=0, allow_inf_nan=False),
    _reported_as("Price must be a positive number"),
]


# Strict so that JSON booleans are not read as 0/1
StockLevel = Annotated[
    int,
    Field(ge=0, le=MAX_STOCK, strict=True),
    _reported_as("Quantity must be a non-negative integer"),
]


# Purchases above MAX_STOCK are reported as insufficient stock by the service
StockAmount = Annotated[
    int,
    Field(ge=1, strict=True),
    _reported_as("Quantity must be at least 1"),
]


class CamelModel(BaseModel):
    """Base schema that (de)serializes with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _require_text(value: str, message: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


class SweetCreate(CamelModel):
    """Schema for creating a catalog entry."""

    name: str
    category: str
    price: Price
    quantity: StockLevel
    description: str = ""
    image_url: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_text(v, "Name is required")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        return _require_text(v, "Category is required")


class SweetUpdate(CamelModel):
    """
    Schema for partial updates.

    A field takes effect only when it is present in the body with a
    non-null value; supplied values follow the same rules as create.
    """

    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Price] = None
    quantity: Optional[StockLevel] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _require_text(v, "Name cannot be empty")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _require_text(v, "Category cannot be empty")

    def changes(self) -> dict:
        """Fields explicitly supplied with a value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class StockChange(BaseModel):
    """Body of purchase and restock requests."""

    quantity: StockAmount


class SweetResponse(CamelModel):
    """Schema for a catalog entry in API responses."""

    id: str
    name: str
    category: str
    price: float
    quantity: int
    description: str
    image_url: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class SweetEnvelope(BaseModel):
    sweet: SweetResponse


class SweetListResponse(BaseModel):
    sweets: List[SweetResponse]


class StockResponse(BaseModel):
    """Result of a purchase or restock."""

    sweet: SweetResponse
    message: str


class MessageResponse(BaseModel):
    message: str
