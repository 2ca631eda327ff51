"""
Shared validators for query parameters and stored configuration.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from shared.config.constants import ANALYTICS_TIME_RANGES, DEFAULT_ANALYTICS_TIME_RANGE
from shared.utils.exceptions import ConfigurationError, ValidationError
from shared.utils.money import ZERO


def parse_report_date(value: Optional[str], default: date) -> date:
    """
    Parse a YYYY-MM-DD query value.

    Args:
        value: Raw query value (None or empty means "use default").
        default: Date used when no value is supplied.

    Raises:
        ValidationError: If the value is not an ISO calendar date.
    """
    if not value:
        return default
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(
            "date must be formatted as YYYY-MM-DD",
            reason="invalid_date",
            value=value,
        )


def parse_percentage(value: Any, setting: str, **log_context: Any) -> Decimal:
    """
    Parse a percentage stored in restaurant metadata ("10" means 10%).

    Missing or blank values default to 0. Anything that is not a finite,
    non-negative number is a configuration error rather than a silent 0.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return ZERO
    if isinstance(value, bool):
        raise ConfigurationError(setting, value, **log_context)
    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation:
        raise ConfigurationError(setting, value, **log_context)
    if not rate.is_finite() or rate < ZERO:
        raise ConfigurationError(setting, value, **log_context)
    return rate


def parse_flag(value: Any, default: bool) -> bool:
    """Interpret a boolean-ish metadata value, falling back to default."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes"}:
            return True
        if lowered in {"false", "0", "no"}:
            return False
    return default


def validate_time_range(value: Optional[str]) -> str:
    """
    Validate an analytics time range ("1d", "7d", "30d", "90d").

    Raises:
        ValidationError: For unsupported ranges.
    """
    if not value:
        return DEFAULT_ANALYTICS_TIME_RANGE
    if value not in ANALYTICS_TIME_RANGES:
        raise ValidationError(
            f"timeRange must be one of {', '.join(ANALYTICS_TIME_RANGES)}",
            reason="invalid_time_range",
            value=value,
        )
    return value
