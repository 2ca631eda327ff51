"""
Centralized HTTP exceptions for consistent error handling.

Every exception carries a short machine-readable ``reason`` next to the
human-readable ``detail``; the application exception handler renders both.

Usage:
    from shared.utils.exceptions import ForbiddenError, ValidationError, DatabaseError

    raise ForbiddenError("access this restaurant", reason="restaurant_not_accessible")
    raise ValidationError("date must be YYYY-MM-DD", reason="invalid_date")
    raise DatabaseError("end-of-day report", restaurant_id=7, date="2026-10-18")
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        reason: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, reason=reason, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.reason = reason


# =============================================================================
# 401 Unauthorized
# =============================================================================


class AuthenticationError(AppException):
    """
    No usable principal on the request (401).

    Fatal to the request and never retried.
    """

    def __init__(self, detail: str = "Authentication required", reason: str = "authentication_required", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            reason=reason,
            log_level="warning",
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


# =============================================================================
# 403 Forbidden Errors
# =============================================================================


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("view dashboard metrics", reason="no_restaurant_access")
    """

    def __init__(self, action: str | None = None, reason: str = "forbidden", **log_context: Any):
        if action:
            detail = f"Not authorized to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            reason=reason,
            log_level="warning",
            action=action,
            **log_context,
        )


class RestaurantAccessError(ForbiddenError):
    """The principal may not operate against the requested restaurant."""

    def __init__(self, restaurant_id: int | None = None, **log_context: Any):
        super().__init__(
            "access this restaurant",
            reason="restaurant_not_accessible",
            restaurant_id=restaurant_id,
            **log_context,
        )


class NoRestaurantAccessError(ForbiddenError):
    """The principal has no restaurant context at all."""

    def __init__(self, **log_context: Any):
        super().__init__(
            "access any restaurant",
            reason="no_restaurant_access",
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("restaurant_id is required", reason="restaurant_id_required")
    """

    def __init__(self, detail: str, reason: str = "invalid_input", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            reason=reason,
            log_level="warning",
            **log_context,
        )


class MissingParameterError(ValidationError):
    """A required query parameter was not supplied."""

    def __init__(self, parameter: str, **log_context: Any):
        super().__init__(
            f"{parameter} is required",
            reason=f"{parameter}_required",
            parameter=parameter,
            **log_context,
        )


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    The caller only sees a generic message; the context goes to the log.
    """

    def __init__(self, detail: str = "Internal server error", reason: str = "internal_error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            reason=reason,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """
    A persistence lookup failed.

    Financial aggregates are never coerced to zero on failure; they raise this.
    """

    def __init__(self, operation: str, **log_context: Any):
        super().__init__(
            "Internal server error",
            reason="upstream_lookup_failed",
            operation=operation,
            **log_context,
        )


class ConfigurationError(InternalError):
    """Restaurant configuration cannot be interpreted."""

    def __init__(self, setting: str, value: Any, **log_context: Any):
        super().__init__(
            "Internal server error",
            reason="invalid_configuration",
            setting=setting,
            value=value,
            **log_context,
        )
