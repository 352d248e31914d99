"""
Tests for service layer.
"""

import pytest
from sqlmodel import Session

from sweetshop.core.exceptions import Conflict, InsufficientStock, NotFound, OutOfStock, ValidationError
from sweetshop.models.sweet import MAX_STOCK, Sweet
from sweetshop.models.user import User, UserRole
from sweetshop.schemas.sweet import SweetCreate, SweetUpdate
from sweetshop.schemas.user import UserCreate
from sweetshop.services.sweet_service import SweetService
from sweetshop.services.user_service import UserService


def test_create_user(session: Session) -> None:
    """Test user creation."""
    user = UserService.create(session, UserCreate(email="service@example.com", password="password123"))

    assert user.id is not None
    assert user.email == "service@example.com"
    assert user.role == UserRole.USER
    assert user.hashed_password != "password123"
    assert user.created_at is not None


def test_create_admin_user(session: Session) -> None:
    user = UserService.create(
        session, UserCreate(email="boss@example.com", password="password123"), role=UserRole.ADMIN
    )
    assert UserService.is_admin(user)


def test_create_duplicate_user_conflicts(session: Session, test_user: User) -> None:
    with pytest.raises(Conflict):
        UserService.create(session, UserCreate(email="User@Example.com", password="password123"))


def test_get_user_by_email_is_case_insensitive(session: Session, test_user: User) -> None:
    user = UserService.get_by_email(session, "USER@example.com")
    assert user is not None
    assert user.id == test_user.id


def test_get_user_by_id(session: Session, test_user: User) -> None:
    user = UserService.get_by_id(session, test_user.id)
    assert user is not None
    assert user.email == test_user.email


def test_authenticate_user_success(session: Session, test_user: User) -> None:
    user = UserService.authenticate(session, "user@example.com", "password123")
    assert user is not None
    assert user.id == test_user.id


def test_authenticate_user_wrong_password(session: Session, test_user: User) -> None:
    assert UserService.authenticate(session, "user@example.com", "wrongpassword") is None


def test_authenticate_nonexistent_user(session: Session) -> None:
    assert UserService.authenticate(session, "nobody@example.com", "password") is None


class TestSweetService:
    def test_create_defaults_optional_text(self, session: Session) -> None:
        sweet = SweetService(session).create(
            SweetCreate(name="Gummy Bears", category="Gummy", price=1.99, quantity=100)
        )
        assert sweet.description == ""
        assert sweet.image_url == ""
        assert sweet.created_at is not None

    def test_get_malformed_id_is_not_found(self, session: Session) -> None:
        with pytest.raises(NotFound):
            SweetService(session).get("507f1f77bcf86cd799439011")

    def test_update_only_touches_supplied_fields(self, session: Session, test_sweet: Sweet) -> None:
        before = test_sweet.updated_at
        sweet = SweetService(session).update(test_sweet.id, SweetUpdate(description=""))

        assert sweet.description == ""
        assert sweet.name == "Test Chocolate"
        assert sweet.image_url == "https://example.com/chocolate.jpg"
        assert sweet.updated_at >= before

    def test_update_accepts_camel_case_keys(self, session: Session, test_sweet: Sweet) -> None:
        update = SweetUpdate.model_validate({"imageUrl": "https://example.com/new.jpg"})
        sweet = SweetService(session).update(test_sweet.id, update)
        assert sweet.image_url == "https://example.com/new.jpg"

    def test_purchase_and_restock_keep_stock_non_negative(
        self, session: Session, test_sweet: Sweet
    ) -> None:
        service = SweetService(session)
        steps = [("purchase", 40), ("purchase", 60), ("restock", 5), ("purchase", 5), ("restock", 1)]
        for operation, amount in steps:
            sweet = getattr(service, operation)(test_sweet.id, amount)
            assert sweet.quantity >= 0
        assert service.get(test_sweet.id).quantity == 1

    def test_insufficient_stock_leaves_quantity_unchanged(
        self, session: Session, test_sweet: Sweet
    ) -> None:
        service = SweetService(session)
        with pytest.raises(InsufficientStock) as exc_info:
            service.purchase(test_sweet.id, 101)

        assert exc_info.value.available == 100
        assert "Only 100 available" in exc_info.value.message
        assert service.get(test_sweet.id).quantity == 100

    def test_out_of_stock_regardless_of_requested_amount(
        self, session: Session, test_sweet: Sweet
    ) -> None:
        service = SweetService(session)
        service.purchase(test_sweet.id, 100)
        for requested in (1, 7, 1000):
            with pytest.raises(OutOfStock):
                service.purchase(test_sweet.id, requested)

    def test_purchase_larger_than_any_stock_level(self, session: Session, test_sweet: Sweet) -> None:
        service = SweetService(session)
        with pytest.raises(InsufficientStock) as exc_info:
            service.purchase(test_sweet.id, 10**20)
        assert exc_info.value.available == 100

    def test_restock_is_capped_at_maximum_stock(self, session: Session, test_sweet: Sweet) -> None:
        service = SweetService(session)
        with pytest.raises(ValidationError):
            service.restock(test_sweet.id, MAX_STOCK)
        assert service.get(test_sweet.id).quantity == 100

        assert service.restock(test_sweet.id, MAX_STOCK - 100).quantity == MAX_STOCK

    def test_oversized_restock_of_missing_sweet_is_not_found(self, session: Session) -> None:
        with pytest.raises(NotFound):
            SweetService(session).restock("7c9e6679-7425-40de-944b-e07fc1f90ae7", 10**20)

    def test_restock_from_zero(self, session: Session, test_sweet: Sweet) -> None:
        service = SweetService(session)
        service.purchase(test_sweet.id, 100)
        assert service.restock(test_sweet.id, 25).quantity == 25

    def test_stock_changes_on_missing_sweet(self, session: Session) -> None:
        service = SweetService(session)
        missing = "7c9e6679-7425-40de-944b-e07fc1f90ae7"
        with pytest.raises(NotFound):
            service.purchase(missing, 1)
        with pytest.raises(NotFound):
            service.restock(missing, 1)

    def test_delete(self, session: Session, test_sweet: Sweet) -> None:
        sweet_id = test_sweet.id
        service = SweetService(session)
        service.delete(sweet_id)
        with pytest.raises(NotFound):
            service.get(sweet_id)
