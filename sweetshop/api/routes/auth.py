"""
Authentication routes for user registration and login.
Provides JWT token-based authentication.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from sweetshop.api.deps import get_token_service
from sweetshop.core.exceptions import Unauthenticated
from sweetshop.core.logging import get_logger
from sweetshop.core.security import TokenService
from sweetshop.db.session import get_session
from sweetshop.schemas.token import AuthResponse
from sweetshop.schemas.user import UserCreate, UserLogin, UserPublic
from sweetshop.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_in: UserCreate,
    session: Annotated[Session, Depends(get_session)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Register a new user and log them in.

    Raises:
        Conflict: If the email is already registered
    """
    user = UserService.create(session, user_create=user_in)
    logger.info(f"New user registered: {user.email} (ID: {user.id})")

    return AuthResponse(
        token=token_service.issue(user.id),
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    session: Annotated[Session, Depends(get_session)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Exchange email and password for an access token.

    Unknown emails and wrong passwords get the same response.
    """
    user = UserService.authenticate(
        session, email=credentials.email, password=credentials.password
    )
    if not user:
        logger.warning(f"Failed login attempt for email: {credentials.email}")
        raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE)

    logger.info(f"User logged in: {user.email} (ID: {user.id})")
    return AuthResponse(
        token=token_service.issue(user.id),
        user=UserPublic.model_validate(user),
    )
