"""
Catalog item model.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

# Largest stock level a 32-bit INTEGER column holds on every backend
MAX_STOCK = 2**31 - 1


class Sweet(SQLModel, table=True):
    """
    A sellable catalog entry with its available stock.

    ``quantity`` is the number of units on hand and must never go negative;
    the CHECK constraint backs the conditional updates in ``SweetService``.
    """

    __tablename__ = "sweets"  # type: ignore
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_sweets_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_sweets_price_non_negative"),
    )

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = Field(index=True, max_length=255)
    category: str = Field(index=True, max_length=255)
    price: float
    quantity: int = Field(default=0)
    description: str = Field(default="")
    image_url: str = Field(default="")

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
