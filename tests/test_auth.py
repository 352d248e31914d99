"""
Tests for authentication endpoints.
"""

from fastapi.testclient import TestClient

from sweetshop.models.user import User


def test_register_user(client: TestClient) -> None:
    """Test user registration."""
    response = client.post(
        "/api/auth/register",
        json={"email": "newuser@example.com", "password": "newpassword123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == "newuser@example.com"
    assert data["user"]["role"] == "user"
    assert "id" in data["user"]
    assert "password" not in data["user"]
    assert "hashed_password" not in data["user"]


def test_register_normalizes_email(client: TestClient) -> None:
    response = client.post(
        "/api/auth/register",
        json={"email": "  Mixed.Case@Example.COM ", "password": "password123"},
    )
    assert response.status_code == 201
    assert response.json()["user"]["email"] == "mixed.case@example.com"


def test_register_duplicate_email(client: TestClient, test_user: User) -> None:
    """Test that duplicate email registration fails."""
    response = client.post(
        "/api/auth/register",
        json={"email": test_user.email, "password": "password123"},
    )
    assert response.status_code == 409
    assert response.json()["error"]["message"] == "User already exists"


def test_register_duplicate_email_different_case(client: TestClient, test_user: User) -> None:
    response = client.post(
        "/api/auth/register",
        json={"email": "USER@example.com", "password": "password123"},
    )
    assert response.status_code == 409


def test_register_missing_email(client: TestClient) -> None:
    response = client.post("/api/auth/register", json={"password": "password123"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_register_missing_password(client: TestClient) -> None:
    response = client.post("/api/auth/register", json={"email": "a@example.com"})
    assert response.status_code == 400


def test_register_short_password(client: TestClient) -> None:
    response = client.post(
        "/api/auth/register",
        json={"email": "short@example.com", "password": "12345"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Password must be at least 6 characters"


def test_register_invalid_email(client: TestClient) -> None:
    response = client.post(
        "/api/auth/register",
        json={"email": "not-an-email", "password": "password123"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_login_success(client: TestClient, test_user: User) -> None:
    """Test successful login."""
    response = client.post(
        "/api/auth/login",
        json={"email": "user@example.com", "password": "password123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"] == {"id": test_user.id, "email": "user@example.com", "role": "user"}


def test_login_wrong_password_and_unknown_email_are_indistinguishable(
    client: TestClient, test_user: User
) -> None:
    wrong_password = client.post(
        "/api/auth/login",
        json={"email": "user@example.com", "password": "wrongpassword"},
    )
    unknown_email = client.post(
        "/api/auth/login",
        json={"email": "nonexistent@example.com", "password": "password123"},
    )
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"]["message"] == "Invalid credentials"


def test_login_missing_password(client: TestClient) -> None:
    response = client.post("/api/auth/login", json={"email": "user@example.com"})
    assert response.status_code == 400


def test_registered_token_grants_access(client: TestClient) -> None:
    token = client.post(
        "/api/auth/register",
        json={"email": "fresh@example.com", "password": "password123"},
    ).json()["token"]

    response = client.get("/api/sweets", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
