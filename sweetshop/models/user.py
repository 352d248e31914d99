"""
User model with role-based access control.
Implements a two-tier admin/user role system.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    """User role enumeration for RBAC."""

    ADMIN = "admin"
    USER = "user"


class User(SQLModel, table=True):
    """
    Registered account.

    Attributes:
        id: Opaque UUID primary key
        email: Unique, lower-cased email address (used for login)
        hashed_password: Salted one-way password hash
        role: User role (admin or user)
        created_at: Timestamp of account creation
        updated_at: Timestamp of last update
    """

    __tablename__ = "users"  # type: ignore

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str
    role: UserRole = Field(default=UserRole.USER)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
