"""
Database session management using SQLModel.
Provides the engine and the per-request session dependency.
"""

from typing import Generator

from sqlmodel import Session, create_engine

from sweetshop.core.config import settings

# SQLite for local development when no server database is configured
if settings.is_sqlite:
    engine = create_engine(
        settings.SQLALCHEMY_DATABASE_URI,
        echo=settings.DEBUG,
        connect_args={"check_same_thread": False},  # Requests are served from a threadpool
    )
else:
    # PostgreSQL with connection pooling
    # pool_pre_ping drops connections the server closed while idle
    engine = create_engine(
        settings.SQLALCHEMY_DATABASE_URI,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def get_session() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session for FastAPI routes.

    Services commit their own writes; anything left uncommitted when the
    request ends is rolled back as the session closes.

    Yields:
        Database session instance
    """
    with Session(engine) as session:
        yield session
