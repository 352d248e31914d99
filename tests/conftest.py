"""
Pytest configuration and fixtures.
Provides test database, client, and common test utilities.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DISABLE_BOOTSTRAP_USERS", "true")

from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from sweetshop.db.session import get_session  # noqa: E402
from sweetshop.main import app  # noqa: E402
from sweetshop.models.sweet import Sweet  # noqa: E402
from sweetshop.models.user import User, UserRole  # noqa: E402
from sweetshop.schemas.user import UserCreate  # noqa: E402
from sweetshop.services.user_service import UserService  # noqa: E402


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """
    Create a test database session.
    Uses an in-memory SQLite database for fast tests.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with dependency overrides.
    """

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(session: Session) -> User:
    user_create = UserCreate(email="user@example.com", password="password123")
    return UserService.create(session, user_create)


@pytest.fixture(name="test_admin")
def test_admin_fixture(session: Session) -> User:
    user_create = UserCreate(email="admin@example.com", password="password123")
    return UserService.create(session, user_create, role=UserRole.ADMIN)


@pytest.fixture(name="user_token")
def user_token_fixture(client: TestClient, test_user: User) -> str:
    """
    Get an access token for a regular user.
    """
    response = client.post(
        "/api/auth/login",
        json={"email": "user@example.com", "password": "password123"},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture(name="admin_token")
def admin_token_fixture(client: TestClient, test_admin: User) -> str:
    """
    Get an access token for an admin user.
    """
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": "password123"},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture(name="test_sweet")
def test_sweet_fixture(session: Session) -> Sweet:
    sweet = Sweet(
        name="Test Chocolate",
        category="Chocolate",
        price=5.99,
        quantity=100,
        description="Delicious chocolate",
        image_url="https://example.com/chocolate.jpg",
    )
    session.add(sweet)
    session.commit()
    session.refresh(sweet)
    return sweet
