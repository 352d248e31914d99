"""
Token schemas for JWT authentication.
"""

from pydantic import BaseModel

from sweetshop.schemas.user import UserPublic


class AuthResponse(BaseModel):
    """Schema returned by register and login: an access token plus the account."""

    token: str
    user: UserPublic
