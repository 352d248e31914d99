"""
User schemas for API request/response validation.
Separates internal models from API contracts using Pydantic.
"""

from typing import Any

from pydantic import BaseModel, EmailStr, field_validator

from sweetshop.core.config import settings
from sweetshop.models.user import UserRole


def _normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class UserCreate(BaseModel):
    """Schema for user registration."""

    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        return v


class UserLogin(BaseModel):
    """Schema for user login."""

    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class UserPublic(BaseModel):
    """
    Schema for user data in API responses.
    Excludes sensitive information like hashed_password.
    """

    id: str
    email: str
    role: UserRole

    model_config = {"from_attributes": True}
