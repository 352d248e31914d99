"""
Main FastAPI application entry point.
Configures the application, middleware, and routes.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session, SQLModel

from sweetshop.api.exception_handlers import register_exception_handlers
from sweetshop.api.routes import auth, health, sweets
from sweetshop.core.config import settings
from sweetshop.core.logging import get_logger, setup_logging
from sweetshop.core.security import TokenService
from sweetshop.db.session import engine
from sweetshop.models.user import UserRole
from sweetshop.schemas.user import UserCreate
from sweetshop.services.user_service import UserService

setup_logging()
logger = get_logger(__name__)


def bootstrap_admin() -> None:
    """Create the first admin account from settings if it does not exist yet."""
    with Session(engine) as session:
        if UserService.get_by_email(session, settings.FIRST_SUPERUSER_EMAIL):
            return
        logger.info("Creating first admin user...")
        admin = UserCreate(
            email=settings.FIRST_SUPERUSER_EMAIL,
            password=settings.FIRST_SUPERUSER_PASSWORD,
        )
        UserService.create(session, admin, role=UserRole.ADMIN)
        logger.info(f"Admin user created: {settings.FIRST_SUPERUSER_EMAIL}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Runs startup and shutdown logic.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)

    if settings.DISABLE_BOOTSTRAP_USERS:
        logger.info("User bootstrapping disabled (DISABLE_BOOTSTRAP_USERS=true)")
    else:
        bootstrap_admin()

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)

# Signing configuration is fixed for the lifetime of the process
app.state.token_service = TokenService.from_settings(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["authorization", "content-type", "accept"],
)

register_exception_handlers(app)

app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(sweets.router, prefix=settings.API_PREFIX)
