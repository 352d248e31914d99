"""Pydantic schemas for request/response validation."""

from sweetshop.schemas.sweet import (
    MessageResponse,
    StockChange,
    StockResponse,
    SweetCreate,
    SweetEnvelope,
    SweetListResponse,
    SweetResponse,
    SweetUpdate,
)
from sweetshop.schemas.token import AuthResponse
from sweetshop.schemas.user import UserCreate, UserLogin, UserPublic

__all__ = [
    "AuthResponse",
    "MessageResponse",
    "StockChange",
    "StockResponse",
    "SweetCreate",
    "SweetEnvelope",
    "SweetListResponse",
    "SweetResponse",
    "SweetUpdate",
    "UserCreate",
    "UserLogin",
    "UserPublic",
]
