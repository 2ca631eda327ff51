"""
Staff Repository - Data access for staff accounts.
"""

from typing import Sequence

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from rest_api.models import Staff
from shared.config.constants import OPERATIONAL_STAFF_ROLES
from .base import RestaurantScopedRepository


class StaffRepository(RestaurantScopedRepository[Staff]):
    """Repository for Staff entities."""

    @property
    def model(self) -> type[Staff]:
        return Staff

    def count_active(
        self,
        restaurant_ids: Sequence[int],
        roles: Sequence[str] = OPERATIONAL_STAFF_ROLES,
    ) -> int:
        """Count active staff holding one of ``roles`` in the given restaurants."""
        query = select(func.count(Staff.id)).where(
            Staff.is_active.is_(True),
            Staff.role.in_(list(roles)),
        )
        query = self._scope(query, restaurant_ids)
        return int(self._db.scalar(query) or 0)

    def find_active(
        self,
        restaurant_ids: Sequence[int],
        roles: Sequence[str] = OPERATIONAL_STAFF_ROLES,
    ) -> Sequence[Staff]:
        """Active staff holding one of ``roles`` in the given restaurants, by id."""
        query = (
            select(Staff)
            .where(Staff.is_active.is_(True), Staff.role.in_(list(roles)))
            .order_by(Staff.id)
        )
        return self._all(self._scope(query, restaurant_ids))


def get_staff_repository(db: Session) -> StaffRepository:
    """Factory function for StaffRepository."""
    return StaffRepository(db)
