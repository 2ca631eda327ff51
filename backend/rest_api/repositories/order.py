"""
Order Repository - Data access for orders and their items.
Eager loading of items -> menu_item prevents N+1 in reports.
"""

from dataclasses import dataclass, field
from typing import Sequence

from sqlalchemy import Select, select, func
from sqlalchemy.orm import Session, selectinload

from rest_api.models import Order, OrderItem
from shared.config.constants import OrderStatus, PaymentStatus
from .base import RestaurantScopedRepository, TimeWindow


@dataclass
class OrderFilters:
    """Filters specific to orders."""

    window: TimeWindow | None = None
    # Column the window applies to: "created_at" or "completed_at"
    time_field: str = "created_at"
    statuses: list[str] = field(default_factory=list)
    payment_status: str | None = None
    with_items: bool = False
    newest_first: bool = False
    limit: int | None = None


class OrderRepository(RestaurantScopedRepository[Order]):
    """
    Repository for Order entities.

    Every query requires a non-empty restaurant-id set; callers with an
    empty scope must not reach the repository at all.
    """

    @property
    def model(self) -> type[Order]:
        return Order

    def _base_query(self, restaurant_ids: Sequence[int]) -> Select:
        if not restaurant_ids:
            raise ValueError("restaurant_ids must not be empty")
        return self._scope(select(Order), restaurant_ids)

    def _apply_filters(self, query: Select, filters: OrderFilters) -> Select:
        if filters.window is not None:
            column = getattr(Order, filters.time_field)
            query = filters.window.apply(query, column)

        if len(filters.statuses) == 1:
            query = query.where(Order.status == filters.statuses[0])
        elif filters.statuses:
            query = query.where(Order.status.in_(filters.statuses))

        if filters.payment_status is not None:
            query = query.where(Order.payment_status == filters.payment_status)

        if filters.with_items:
            query = query.options(
                selectinload(Order.items).selectinload(OrderItem.menu_item)
            )

        order_column = getattr(Order, filters.time_field)
        if filters.newest_first:
            query = query.order_by(order_column.desc(), Order.id.desc())
        else:
            query = query.order_by(order_column, Order.id)

        if filters.limit is not None:
            query = query.limit(filters.limit)
        return query

    def find_all(
        self,
        restaurant_ids: Sequence[int],
        filters: OrderFilters | None = None,
    ) -> Sequence[Order]:
        """Find orders of the given restaurants matching the filters."""
        query = self._apply_filters(self._base_query(restaurant_ids), filters or OrderFilters())
        return self._all(query)

    def count_by_status(
        self,
        restaurant_ids: Sequence[int],
        statuses: Sequence[str] = OrderStatus.ACTIVE,
    ) -> dict[str, int]:
        """
        Order counts per status, regardless of age.

        Statuses with no orders are absent from the result.
        """
        query = (
            select(Order.status, func.count(Order.id))
            .where(Order.status.in_(list(statuses)))
            .group_by(Order.status)
        )
        query = self._scope(query, restaurant_ids)
        return {status: int(count) for status, count in self._db.execute(query).all()}

    def find_recent(
        self,
        restaurant_ids: Sequence[int],
        limit: int,
    ) -> Sequence[Order]:
        """Newest orders of any age, with items."""
        filters = OrderFilters(with_items=True, newest_first=True, limit=limit)
        return self.find_all(restaurant_ids, filters)

    def find_completed_in(
        self,
        restaurant_ids: Sequence[int],
        window: TimeWindow,
        with_items: bool = False,
    ) -> Sequence[Order]:
        """Completed orders whose completed_at falls inside the window."""
        filters = OrderFilters(
            window=window,
            time_field="completed_at",
            statuses=[OrderStatus.COMPLETED],
            with_items=with_items,
        )
        return self.find_all(restaurant_ids, filters)

    def find_paid_in(
        self,
        restaurant_ids: Sequence[int],
        window: TimeWindow,
        with_items: bool = False,
    ) -> Sequence[Order]:
        """Paid orders created inside the window."""
        filters = OrderFilters(
            window=window,
            payment_status=PaymentStatus.PAID,
            with_items=with_items,
        )
        return self.find_all(restaurant_ids, filters)


def get_order_repository(db: Session) -> OrderRepository:
    """Factory function for OrderRepository."""
    return OrderRepository(db)
