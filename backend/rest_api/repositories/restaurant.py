"""
Restaurant Repository - lookups used for tenant scoping.
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Restaurant
from .base import BaseRepository


class RestaurantRepository(BaseRepository[Restaurant]):
    """
    Repository for Restaurant entities.

    Satisfies the RestaurantDirectory protocol the access resolver needs.
    Inactive restaurants are invisible to scoping.
    """

    @property
    def model(self) -> type[Restaurant]:
        return Restaurant

    def find_restaurant(
        self,
        restaurant_id: int,
        organization_id: int | None = None,
    ) -> Restaurant | None:
        """
        Find an active restaurant by id.

        When organization_id is given the lookup is constrained to that
        organization, so a restaurant of another tenant is indistinguishable
        from one that does not exist.
        """
        query = select(Restaurant).where(
            Restaurant.id == restaurant_id,
            Restaurant.is_active.is_(True),
        )
        if organization_id is not None:
            query = query.where(Restaurant.organization_id == organization_id)
        return self._db.scalar(query)

    def list_restaurants(self, organization_id: int) -> Sequence[Restaurant]:
        """All active restaurants of an organization, by id."""
        query = (
            select(Restaurant)
            .where(
                Restaurant.organization_id == organization_id,
                Restaurant.is_active.is_(True),
            )
            .order_by(Restaurant.id)
        )
        return self._all(query)

    def list_all_active(self) -> Sequence[Restaurant]:
        """Every active restaurant (super_admin selector)."""
        query = (
            select(Restaurant)
            .where(Restaurant.is_active.is_(True))
            .order_by(Restaurant.organization_id, Restaurant.id)
        )
        return self._all(query)

    def get(self, restaurant_id: int) -> Restaurant | None:
        """Fetch by primary key regardless of state (report settings)."""
        return self._db.get(Restaurant, restaurant_id)


def get_restaurant_repository(db: Session) -> RestaurantRepository:
    """Factory function for RestaurantRepository."""
    return RestaurantRepository(db)
