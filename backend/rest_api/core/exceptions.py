"""
Exception handlers.

Every error response has the body {"detail": ..., "reason": ...}. Anything
not raised as an AppException becomes a logged, generic 500.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config.logging import rest_api_logger as logger
from shared.utils.exceptions import AppException


def _error(status_code: int, detail: str, reason: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "reason": reason},
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return _error(exc.status_code, exc.detail, exc.reason, exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    reason = "not_found" if exc.status_code == status.HTTP_404_NOT_FOUND else "http_error"
    return _error(exc.status_code, str(exc.detail), reason, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed query parameters are a 400 like any other bad input."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "query")
    detail = f"{location}: {first.get('msg', 'invalid value')}" if location else "Invalid request"
    logger.warning("Request validation failed", path=request.url.path, errors=len(errors))
    return _error(status.HTTP_400_BAD_REQUEST, detail, "invalid_input")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "internal_error")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
