"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import Role, OrderStatus, RESTAURANT_SCOPED_ROLES

    if principal.role in RESTAURANT_SCOPED_ROLES:
        ...

    if order.status == OrderStatus.COMPLETED:
        ...
"""

from enum import Enum
from typing import Final


# =============================================================================
# Staff Roles
# =============================================================================


class Role(str, Enum):
    """
    Closed set of principal roles.

    super_admin and org_admin are organization-scoped; every other role is
    bound to a single restaurant.
    """

    SUPER_ADMIN = "super_admin"
    ORG_ADMIN = "org_admin"
    MANAGER = "manager"
    SERVER = "server"
    KITCHEN = "kitchen"
    CASHIER = "cashier"


ORGANIZATION_SCOPED_ROLES: Final[frozenset[Role]] = frozenset({Role.SUPER_ADMIN, Role.ORG_ADMIN})
RESTAURANT_SCOPED_ROLES: Final[frozenset[Role]] = frozenset(
    {Role.MANAGER, Role.SERVER, Role.KITCHEN, Role.CASHIER}
)
# Roles counted as on-floor staff on the dashboard
OPERATIONAL_STAFF_ROLES: Final[list[str]] = [
    Role.SERVER.value,
    Role.KITCHEN.value,
    Role.CASHIER.value,
    Role.MANAGER.value,
]


# =============================================================================
# Entity Status Constants
# =============================================================================


class OrderStatus:
    """Order status constants."""

    PENDING: Final[str] = "pending"
    CONFIRMED: Final[str] = "confirmed"
    PREPARING: Final[str] = "preparing"
    READY: Final[str] = "ready"
    SERVED: Final[str] = "served"
    COMPLETED: Final[str] = "completed"
    CANCELLED: Final[str] = "cancelled"

    ALL: Final[list[str]] = [PENDING, CONFIRMED, PREPARING, READY, SERVED, COMPLETED, CANCELLED]
    # Orders still moving through the kitchen/floor
    ACTIVE: Final[list[str]] = [PENDING, CONFIRMED, PREPARING, READY]


class PaymentStatus:
    """Order payment status constants."""

    UNPAID: Final[str] = "unpaid"
    PAID: Final[str] = "paid"
    REFUNDED: Final[str] = "refunded"


class PaymentMethod:
    """Payment method constants (fixed shape of the end-of-day breakdown)."""

    CASH: Final[str] = "cash"
    CARD: Final[str] = "card"
    DIGITAL: Final[str] = "digital"

    ALL: Final[list[str]] = [CASH, CARD, DIGITAL]


# =============================================================================
# Reporting Constants
# =============================================================================


class ReportLabels:
    """Fallback labels so rollups always reconcile to the subtotal."""

    UNCATEGORIZED: Final[str] = "Uncategorized"
    UNKNOWN_ITEM: Final[str] = "Unknown Item"
    UNKNOWN_STAFF: Final[str] = "Unknown"
    TAKEOUT: Final[str] = "Takeout"


class ReportMetadataKeys:
    """Keys read from restaurant.metadata for tax configuration."""

    GST_RATE: Final[str] = "gst_rate"
    SERVICE_CHARGE_RATE: Final[str] = "service_charge_rate"
    GST_INCLUDES_SERVICE_CHARGE: Final[str] = "gst_includes_service_charge"


# Dashboard hourly series covers the current hour and the six before it
HOURLY_WINDOW_HOURS: Final[int] = 7

# Analytics hourly series: 9:00 through 22:00 local time
ANALYTICS_FIRST_HOUR: Final[int] = 9
ANALYTICS_HOUR_COUNT: Final[int] = 14
POPULAR_ITEMS_LIMIT: Final[int] = 5

# Supported analytics ranges (query value -> days)
ANALYTICS_TIME_RANGES: Final[dict[str, int]] = {
    "1d": 1,
    "7d": 7,
    "30d": 30,
    "90d": 90,
}
DEFAULT_ANALYTICS_TIME_RANGE: Final[str] = "7d"
