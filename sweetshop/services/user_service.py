"""
User service layer implementing business logic for user operations.
Separates business logic from API routes and database operations.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from sweetshop.core.exceptions import Conflict
from sweetshop.core.logging import get_logger
from sweetshop.core.security import get_password_hash, verify_password
from sweetshop.models.user import User, UserRole
from sweetshop.schemas.user import UserCreate

logger = get_logger(__name__)


class UserService:
    """Service class for user-related operations."""

    @staticmethod
    def get_by_email(session: Session, email: str) -> Optional[User]:
        """
        Retrieve a user by email address.

        Args:
            session: Database session
            email: Email address to search for (matched case-insensitively)

        Returns:
            User if found, None otherwise
        """
        statement = select(User).where(User.email == email.strip().lower())
        return session.exec(statement).first()

    @staticmethod
    def get_by_id(session: Session, user_id: str) -> Optional[User]:
        """
        Retrieve a user by ID.

        Args:
            session: Database session
            user_id: User ID to search for

        Returns:
            User if found, None otherwise
        """
        return session.get(User, user_id)

    @staticmethod
    def create(session: Session, user_create: UserCreate, role: UserRole = UserRole.USER) -> User:
        """
        Create a new user with hashed password.

        Args:
            session: Database session
            user_create: User creation data
            role: User role (defaults to USER)

        Returns:
            Created user instance

        Raises:
            Conflict: If the email is already registered
        """
        email = user_create.email.strip().lower()
        if UserService.get_by_email(session, email):
            raise Conflict("User already exists")

        db_user = User(
            email=email,
            hashed_password=get_password_hash(user_create.password),
            role=role,
        )
        session.add(db_user)
        try:
            session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration on the unique index
            session.rollback()
            logger.warning(f"Unique email violation on insert: {email}")
            raise Conflict("User already exists")
        session.refresh(db_user)
        return db_user

    @staticmethod
    def authenticate(session: Session, email: str, password: str) -> Optional[User]:
        """
        Authenticate a user by email and password.

        Returns:
            User if authentication successful, None otherwise
        """
        user = UserService.get_by_email(session, email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    def is_admin(user: User) -> bool:
        return user.role == UserRole.ADMIN
