"""
Repository Pattern implementation.
Centralizes restaurant-scoped data access with guaranteed eager loading.

Usage:
    from rest_api.repositories import get_order_repository, TimeWindow

    repo = get_order_repository(db)
    orders = repo.find_completed_in([1, 2], TimeWindow(start, end), with_items=True)
"""

from .base import BaseRepository, RestaurantScopedRepository, TimeWindow
from .restaurant import RestaurantRepository, get_restaurant_repository
from .order import OrderRepository, OrderFilters, get_order_repository
from .staff import StaffRepository, get_staff_repository
from .category import CategoryRepository, get_category_repository

__all__ = [
    # Base
    "BaseRepository",
    "RestaurantScopedRepository",
    "TimeWindow",
    # Restaurant
    "RestaurantRepository",
    "get_restaurant_repository",
    # Order
    "OrderRepository",
    "OrderFilters",
    "get_order_repository",
    # Staff
    "StaffRepository",
    "get_staff_repository",
    # Category
    "CategoryRepository",
    "get_category_repository",
]
