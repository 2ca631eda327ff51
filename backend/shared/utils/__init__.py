"""
Utilities module: Exceptions, money helpers, schemas.
"""

from shared.utils.exceptions import (
    AppException,
    AuthenticationError,
    ForbiddenError,
    ValidationError,
    InternalError,
    DatabaseError,
)
from shared.utils.money import to_decimal, money, percent_of

__all__ = [
    # exceptions
    "AppException",
    "AuthenticationError",
    "ForbiddenError",
    "ValidationError",
    "InternalError",
    "DatabaseError",
    # money
    "to_decimal",
    "money",
    "percent_of",
]
