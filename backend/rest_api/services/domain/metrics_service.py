"""
Dashboard Metrics Domain Service.

Computes same-day operational metrics over an already-resolved restaurant
set. The set is trusted: scoping happens in the access resolver, never here.
"""

from collections import defaultdict
from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Order
from rest_api.repositories import (
    TimeWindow,
    get_order_repository,
    get_staff_repository,
)
from shared.config.constants import HOURLY_WINDOW_HOURS, OrderStatus, ReportLabels
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.utils.dates import ONE_DAY, as_utc, local_midnight
from shared.utils.exceptions import DatabaseError
from shared.utils.money import ZERO, money, percent_change, to_decimal
from shared.utils.schemas import DashboardMetrics, HourlyRevenuePoint, RecentOrderOutput

logger = get_logger(__name__)


def format_order_number(order_id: int) -> str:
    """'#' followed by the last three digits of the id."""
    return f"#{str(order_id)[-3:]}"


def format_table(table_number: int | None) -> str:
    return f"Table {table_number}" if table_number else ReportLabels.TAKEOUT


def summarize_items(order: Order) -> tuple[str, int]:
    """
    One-line item summary and total quantity of an order.

    "Burger + 2 more" names the first item and counts the other distinct
    items; quantity is summed over all lines.
    """
    names: list[str] = []
    for item in order.items:
        if item.menu_item is not None and item.menu_item.name not in names:
            names.append(item.menu_item.name)
    item_count = sum(item.quantity for item in order.items)

    if not names:
        return ReportLabels.UNKNOWN_ITEM, item_count
    if len(names) == 1:
        return names[0], item_count
    return f"{names[0]} + {len(names) - 1} more", item_count


class MetricsService:
    """
    Domain service for the dashboard metrics.

    Revenue and active-order lookups are required: their failure raises
    DatabaseError. Staff count and recent orders are best-effort and degrade
    to 0 / [] with a warning.
    """

    def __init__(self, db: Session, recent_orders_limit: int | None = None):
        self._orders = get_order_repository(db)
        self._staff = get_staff_repository(db)
        self._recent_limit = recent_orders_limit or settings.recent_orders_limit

    def compute_daily_metrics(
        self,
        restaurant_ids: Sequence[int],
        now: datetime,
    ) -> DashboardMetrics:
        """
        Compute dashboard metrics for ``now``'s calendar day.

        Args:
            restaurant_ids: Resolved scope. Empty means zeroed metrics and no
                queries at all.
            now: Current instant, aware, in the business time zone.
        """
        if not restaurant_ids:
            return DashboardMetrics()

        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        ids = list(restaurant_ids)
        today_start = local_midnight(now)
        today = TimeWindow(today_start, today_start + ONE_DAY)
        yesterday = TimeWindow(today_start - ONE_DAY, today_start)

        try:
            todays_paid = self._orders.find_paid_in(ids, today)
            yesterdays_paid = self._orders.find_paid_in(ids, yesterday)
        except SQLAlchemyError as e:
            raise DatabaseError(
                "fetch dashboard revenue",
                restaurant_ids=ids,
                window=today.describe(),
                error=str(e),
            ) from e

        todays_revenue = self._sum_totals(todays_paid)
        yesterdays_revenue = self._sum_totals(yesterdays_paid)

        try:
            by_status = self._orders.count_by_status(ids, OrderStatus.ACTIVE)
            completed_today = self._orders.find_completed_in(ids, today)
        except SQLAlchemyError as e:
            raise DatabaseError(
                "fetch active orders",
                restaurant_ids=ids,
                window=today.describe(),
                error=str(e),
            ) from e

        return DashboardMetrics(
            todays_revenue=money(todays_revenue),
            revenue_change=percent_change(todays_revenue, yesterdays_revenue),
            active_orders=sum(by_status.values()),
            pending_orders=by_status.get(OrderStatus.PENDING, 0),
            preparing_orders=by_status.get(OrderStatus.PREPARING, 0),
            staff_count=self._staff_count(ids),
            avg_order_time=self._average_order_minutes(completed_today),
            recent_orders=self._recent_orders(ids),
            hourly_data=self._hourly_revenue(todays_paid, now),
        )

    @staticmethod
    def _sum_totals(orders: Sequence[Order]) -> Decimal:
        return sum((to_decimal(o.total_amount) for o in orders), ZERO)

    def _staff_count(self, restaurant_ids: list[int]) -> int:
        try:
            return self._staff.count_active(restaurant_ids)
        except SQLAlchemyError as e:
            logger.warning(
                "Staff count unavailable, reporting 0",
                restaurant_ids=restaurant_ids,
                error=str(e),
            )
            return 0

    def _recent_orders(self, restaurant_ids: list[int]) -> list[RecentOrderOutput]:
        try:
            orders = self._orders.find_recent(restaurant_ids, self._recent_limit)
        except SQLAlchemyError as e:
            logger.warning(
                "Recent orders unavailable, reporting none",
                restaurant_ids=restaurant_ids,
                error=str(e),
            )
            return []

        recent = []
        for order in orders:
            items, item_count = summarize_items(order)
            recent.append(
                RecentOrderOutput(
                    id=order.id,
                    order_number=format_order_number(order.id),
                    table=format_table(order.table_number),
                    items=items,
                    total=money(to_decimal(order.total_amount)),
                    status=order.status,
                    item_count=item_count,
                )
            )
        return recent

    @staticmethod
    def _average_order_minutes(completed: Sequence[Order]) -> float:
        """Mean created -> completed duration in minutes; 0 when nothing completed."""
        durations = [
            (as_utc(o.completed_at) - as_utc(o.created_at)).total_seconds() / 60
            for o in completed
            if o.completed_at is not None and o.created_at is not None
        ]
        if not durations:
            return 0.0
        return round(sum(durations) / len(durations), 1)

    @staticmethod
    def _hourly_revenue(todays_paid: Sequence[Order], now: datetime) -> list[HourlyRevenuePoint]:
        """Paid revenue per local hour for the current hour and up to six before it."""
        zone = now.tzinfo
        buckets: dict[int, Decimal] = defaultdict(lambda: ZERO)
        for order in todays_paid:
            hour = as_utc(order.created_at).astimezone(zone).hour
            buckets[hour] += to_decimal(order.total_amount)

        first_hour = max(0, now.hour - (HOURLY_WINDOW_HOURS - 1))
        return [
            HourlyRevenuePoint(hour=f"{hour}:00", revenue=money(buckets[hour]))
            for hour in range(first_hour, now.hour + 1)
        ]
