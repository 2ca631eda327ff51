"""
SQLAlchemy ORM Models Package.

Models are organized into domain-specific modules:
- base: Base class and TimestampMixin
- tenant: Organization, Restaurant
- user: Staff
- catalog: Category, MenuItem
- order: Order, OrderItem
"""

from .base import Base, TimestampMixin
from .tenant import Organization, Restaurant
from .user import Staff
from .catalog import Category, MenuItem
from .order import Order, OrderItem

__all__ = [
    "Base",
    "TimestampMixin",
    "Organization",
    "Restaurant",
    "Staff",
    "Category",
    "MenuItem",
    "Order",
    "OrderItem",
]
