"""
Sweet service for catalog management and stock mutation.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import Session, col, or_, select

from sweetshop.core.exceptions import InsufficientStock, NotFound, OutOfStock, ValidationError
from sweetshop.core.logging import get_logger
from sweetshop.models.sweet import MAX_STOCK, Sweet
from sweetshop.schemas.sweet import SweetCreate, SweetUpdate

logger = get_logger(__name__)

SWEET_NOT_FOUND = "Sweet not found"

sweets_table = Sweet.__table__  # type: ignore[attr-defined]


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SweetService:
    """
    Service for managing catalog entries.

    Purchase and restock are single conditional UPDATE statements, so stock
    checks and writes cannot interleave between concurrent requests.
    """

    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def _parse_id(sweet_id: str) -> str:
        """Normalize an ID, treating anything that is not a UUID as unknown."""
        try:
            return str(UUID(str(sweet_id)))
        except ValueError:
            raise NotFound(SWEET_NOT_FOUND)

    def get(self, sweet_id: str) -> Sweet:
        """
        Get a sweet by ID.

        Raises:
            NotFound: If the ID is malformed or does not resolve
        """
        sweet = self.session.get(Sweet, self._parse_id(sweet_id))
        if sweet is None:
            raise NotFound(SWEET_NOT_FOUND)
        return sweet

    def list_all(self) -> List[Sweet]:
        """All sweets, newest first."""
        statement = select(Sweet).order_by(col(Sweet.created_at).desc())
        return list(self.session.exec(statement).all())

    def search(
        self,
        q: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> List[Sweet]:
        """
        Filter sweets; every supplied filter must hold.

        Args:
            q: Case-insensitive substring matched against name, category and description
            category: Exact category
            min_price: Inclusive lower price bound
            max_price: Inclusive upper price bound

        Returns:
            Matching sweets, newest first
        """
        statement = select(Sweet)

        if q:
            pattern = f"%{_escape_like(q)}%"
            statement = statement.where(
                or_(
                    col(Sweet.name).ilike(pattern, escape="\\"),
                    col(Sweet.category).ilike(pattern, escape="\\"),
                    col(Sweet.description).ilike(pattern, escape="\\"),
                )
            )
        if category:
            statement = statement.where(Sweet.category == category)
        if min_price is not None:
            statement = statement.where(col(Sweet.price) >= min_price)
        if max_price is not None:
            statement = statement.where(col(Sweet.price) <= max_price)

        statement = statement.order_by(col(Sweet.created_at).desc())
        return list(self.session.exec(statement).all())

    def create(self, sweet_in: SweetCreate) -> Sweet:
        sweet = Sweet(**sweet_in.model_dump())
        self.session.add(sweet)
        self.session.commit()
        self.session.refresh(sweet)
        logger.info(f"Created sweet {sweet.id} ({sweet.name})")
        return sweet

    def update(self, sweet_id: str, sweet_in: SweetUpdate) -> Sweet:
        """
        Apply a partial update.

        Only fields supplied with a non-null value are written, so an
        explicit empty description or image URL clears the stored value.
        """
        sweet = self.get(sweet_id)
        changes = sweet_in.changes()
        for field, value in changes.items():
            setattr(sweet, field, value)
        sweet.updated_at = datetime.now(timezone.utc)

        self.session.add(sweet)
        self.session.commit()
        self.session.refresh(sweet)
        logger.info(f"Updated sweet {sweet.id}: {sorted(changes)}")
        return sweet

    def delete(self, sweet_id: str) -> None:
        sweet = self.get(sweet_id)
        self.session.delete(sweet)
        self.session.commit()
        logger.info(f"Deleted sweet {sweet_id}")

    def purchase(self, sweet_id: str, quantity: int) -> Sweet:
        """
        Take ``quantity`` units out of stock.

        The decrement only applies where enough stock remains. When no row
        is affected, the current record is read to report why.

        Raises:
            NotFound: If the sweet does not exist
            OutOfStock: If the sweet has no stock left
            InsufficientStock: If fewer than ``quantity`` units remain
        """
        sweet_id = self._parse_id(sweet_id)
        updated = 0
        # No stock level reaches past MAX_STOCK, and larger values cannot be bound
        if quantity <= MAX_STOCK:
            statement = (
                update(sweets_table)
                .where(
                    sweets_table.c.id == sweet_id,
                    sweets_table.c.quantity >= quantity,
                )
                .values(
                    quantity=sweets_table.c.quantity - quantity,
                    updated_at=datetime.now(timezone.utc),
                )
            )
            updated = self.session.connection().execute(statement).rowcount

        if updated == 0:
            self.session.rollback()
            sweet = self.get(sweet_id)
            if sweet.quantity == 0:
                logger.warning(f"Purchase rejected, sweet {sweet_id} out of stock")
                raise OutOfStock()
            logger.warning(
                f"Purchase rejected, sweet {sweet_id} has {sweet.quantity} left, {quantity} requested"
            )
            raise InsufficientStock(available=sweet.quantity)

        self.session.commit()
        logger.info(f"Purchased {quantity} of sweet {sweet_id}")
        return self.get(sweet_id)

    def restock(self, sweet_id: str, quantity: int) -> Sweet:
        """
        Add ``quantity`` units to stock. Allowed at zero stock.

        The increment only applies while the result stays within MAX_STOCK.

        Raises:
            NotFound: If the sweet does not exist
            ValidationError: If the new stock level would exceed MAX_STOCK
        """
        sweet_id = self._parse_id(sweet_id)
        headroom = MAX_STOCK - quantity
        updated = 0
        if headroom >= 0:
            statement = (
                update(sweets_table)
                .where(
                    sweets_table.c.id == sweet_id,
                    sweets_table.c.quantity <= headroom,
                )
                .values(
                    quantity=sweets_table.c.quantity + quantity,
                    updated_at=datetime.now(timezone.utc),
                )
            )
            updated = self.session.connection().execute(statement).rowcount

        if updated == 0:
            self.session.rollback()
            sweet = self.get(sweet_id)
            logger.warning(
                f"Restock rejected, sweet {sweet_id} has {sweet.quantity}, {quantity} would exceed the limit"
            )
            raise ValidationError(f"Stock cannot exceed {MAX_STOCK} items")

        self.session.commit()
        logger.info(f"Restocked {quantity} of sweet {sweet_id}")
        return self.get(sweet_id)
