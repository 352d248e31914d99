"""
Security utilities for password hashing and JWT token management.

Passwords are hashed with ``pbkdf2_sha256`` (salted, one-way). Tokens are
issued and verified by a ``TokenService`` that is built once from settings
and handed to the request layer, so no signing material is read from the
environment at request time.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from sweetshop.core.config import Settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """The token was valid but its expiry has passed."""


class TokenInvalidError(TokenError):
    """The token could not be parsed, failed its signature check, or has no subject."""


class TokenService:
    """Issues and verifies signed, time-limited access tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(days=7),
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    def issue(self, subject: str | Any) -> str:
        """
        Create a JWT access token.

        Args:
            subject: The subject (the user ID) to encode in the token

        Returns:
            Encoded JWT token string
        """
        issued_at = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(subject),
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Verify a token and return the user ID it was issued for.

        Raises:
            TokenExpiredError: If the token's expiry has passed
            TokenInvalidError: If the token is malformed, tampered with, or has no subject
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError(str(e)) from e
        except JWTError as e:
            raise TokenInvalidError(str(e)) from e

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            raise TokenInvalidError("Token missing subject claim")
        return subject


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using the configured default scheme.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)
