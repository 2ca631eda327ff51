"""
Category Repository - Data access for menu categories.
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Category
from .base import RestaurantScopedRepository


class CategoryRepository(RestaurantScopedRepository[Category]):
    """Repository for Category entities."""

    @property
    def model(self) -> type[Category]:
        return Category

    def find_all(self, restaurant_ids: Sequence[int]) -> Sequence[Category]:
        """Categories of the given restaurants, by name."""
        query = self._scope(select(Category).order_by(Category.name, Category.id), restaurant_ids)
        return self._all(query)

    def names_by_id(self, restaurant_ids: Sequence[int]) -> dict[int, str]:
        """Map of category id to name for report rollups."""
        return {category.id: category.name for category in self.find_all(restaurant_ids)}


def get_category_repository(db: Session) -> CategoryRepository:
    """Factory function for CategoryRepository."""
    return CategoryRepository(db)
