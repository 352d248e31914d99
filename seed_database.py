#!/usr/bin/env python3
"""
Reset the database to a demo catalog: one admin, one regular user and a
handful of sample sweets.

Usage:
    python seed_database.py
"""

from sqlalchemy import delete
from sqlmodel import Session, SQLModel

from sweetshop.core.logging import get_logger, setup_logging
from sweetshop.db.session import engine
from sweetshop.models.sweet import Sweet
from sweetshop.models.user import User, UserRole
from sweetshop.schemas.sweet import SweetCreate
from sweetshop.schemas.user import UserCreate
from sweetshop.services.sweet_service import SweetService
from sweetshop.services.user_service import UserService

logger = get_logger(__name__)

ADMIN = UserCreate(email="admin@sweetshop.com", password="admin123")
CUSTOMER = UserCreate(email="user@sweetshop.com", password="user123")

SAMPLE_SWEETS = [
    SweetCreate(
        name="Milk Chocolate Bar",
        category="Chocolate",
        price=2.99,
        quantity=50,
        description="Smooth and creamy milk chocolate",
    ),
    SweetCreate(
        name="Gummy Bears",
        category="Gummy",
        price=1.99,
        quantity=100,
        description="Colorful fruity gummy bears",
    ),
    SweetCreate(
        name="Lollipops",
        category="Lollipop",
        price=0.99,
        quantity=200,
        description="Classic swirl lollipops",
    ),
    SweetCreate(
        name="Caramel Chews",
        category="Caramel",
        price=3.49,
        quantity=75,
        description="Soft and chewy caramel candies",
    ),
    SweetCreate(
        name="Dark Chocolate Truffles",
        category="Chocolate",
        price=5.99,
        quantity=30,
        description="Premium dark chocolate truffles",
    ),
    SweetCreate(
        name="Sour Gummy Worms",
        category="Gummy",
        price=2.49,
        quantity=80,
        description="Tangy sour gummy worms",
    ),
    SweetCreate(
        name="Peppermint Hard Candy",
        category="Hard Candy",
        price=1.49,
        quantity=150,
        description="Refreshing peppermint candies",
    ),
    SweetCreate(
        name="Toffee Brittle",
        category="Toffee",
        price=4.49,
        quantity=40,
        description="Crunchy butter toffee brittle",
    ),
]


def seed_database(session: Session) -> None:
    """Replace all users and sweets with the demo data set."""
    session.connection().execute(delete(Sweet.__table__))  # type: ignore[attr-defined]
    session.connection().execute(delete(User.__table__))  # type: ignore[attr-defined]
    session.commit()
    logger.info("Cleared existing data")

    UserService.create(session, ADMIN, role=UserRole.ADMIN)
    UserService.create(session, CUSTOMER)
    logger.info(f"Created users {ADMIN.email} (admin) and {CUSTOMER.email}")

    service = SweetService(session)
    for sweet_in in SAMPLE_SWEETS:
        service.create(sweet_in)
    logger.info(f"Created {len(SAMPLE_SWEETS)} sample sweets")


if __name__ == "__main__":
    setup_logging()
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        seed_database(session)
    print("Database seeded successfully!")
    print(f"  Admin: {ADMIN.email} / {ADMIN.password}")
    print(f"  User:  {CUSTOMER.email} / {CUSTOMER.password}")
