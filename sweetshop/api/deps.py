"""
API dependencies for FastAPI dependency injection.
Provides reusable dependencies for authentication and authorization.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header, Request
from sqlmodel import Session

from sweetshop.core.exceptions import Forbidden, Unauthenticated
from sweetshop.core.logging import get_logger
from sweetshop.core.security import TokenExpiredError, TokenInvalidError, TokenService
from sweetshop.db.session import get_session
from sweetshop.models.user import User
from sweetshop.services.sweet_service import SweetService
from sweetshop.services.user_service import UserService

logger = get_logger(__name__)

NO_TOKEN_MESSAGE = "No token provided, authorization denied"
INVALID_TOKEN_MESSAGE = "Token is not valid"
EXPIRED_TOKEN_MESSAGE = "Token has expired"


def get_token_service(request: Request) -> TokenService:
    """The process-wide token service, built once at application setup."""
    return request.app.state.token_service


def get_sweet_service(session: Annotated[Session, Depends(get_session)]) -> SweetService:
    return SweetService(session)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header value.

    Raises:
        Unauthenticated: If the header is absent or not exactly ``Bearer <token>``
    """
    if not authorization:
        raise Unauthenticated(NO_TOKEN_MESSAGE)
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise Unauthenticated(NO_TOKEN_MESSAGE)
    return parts[1]


def get_current_user(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> User:
    """
    Dependency to get the current authenticated user from the bearer token.
    The user is also attached to ``request.state.user``.

    Raises:
        Unauthenticated: If the token is missing, malformed, expired, or its user no longer exists
    """
    token = extract_bearer_token(authorization)

    try:
        user_id = token_service.verify(token)
    except TokenExpiredError:
        logger.warning("Rejected expired token")
        raise Unauthenticated(EXPIRED_TOKEN_MESSAGE)
    except TokenInvalidError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise Unauthenticated(INVALID_TOKEN_MESSAGE)

    user = UserService.get_by_id(session, user_id=user_id)
    if user is None:
        logger.warning(f"User {user_id} not found")
        raise Unauthenticated(INVALID_TOKEN_MESSAGE)

    request.state.user = user
    return user


def authorize_admin(user: Optional[User]) -> User:
    """
    Require an already-authenticated admin.

    Raises:
        Unauthenticated: If no user has been resolved for the request
        Forbidden: If the user is not an admin
    """
    if user is None:
        raise Unauthenticated("Not authorized")
    if not UserService.is_admin(user):
        logger.warning(f"Non-admin user {user.id} attempted admin access")
        raise Forbidden("Access denied. Admin privileges required")
    return user


def get_current_admin_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency to ensure current user is an admin."""
    return authorize_admin(current_user)
