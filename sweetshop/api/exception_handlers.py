"""Global exception handlers.

Every error leaves the API as ``{"error": {"message": str}}``. Unhandled
exceptions are logged with their traceback and reported to the client with
a generic message only.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sweetshop.core.exceptions import AppError
from sweetshop.core.logging import get_logger

logger = get_logger("sweetshop.exception")

SERVER_ERROR_MESSAGE = "Server error"


def build_error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message}},
        headers=headers,
    )


def validation_message(error: dict[str, Any]) -> str:
    """Turn one pydantic error into a client-facing sentence."""
    ctx_error = error.get("ctx", {}).get("error")
    if error.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)

    loc = [str(part) for part in error.get("loc", []) if part not in ("body", "query", "path", "header")]
    message = error.get("msg", "Invalid value")
    if loc:
        return f"{'.'.join(loc)}: {message}"
    return message


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return build_error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle routing-level HTTP errors (404 unknown route, 405, ...)."""
    if exc.status_code >= 500:
        logger.error(f"HTTPException status={exc.status_code} detail={exc.detail} path={request.url.path}")
    return build_error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first invalid field as a 400."""
    errors = exc.errors()
    message = validation_message(errors[0]) if errors else "Invalid request"
    return build_error_response(400, message)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception path={request.url.path}")
    return build_error_response(500, SERVER_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)
