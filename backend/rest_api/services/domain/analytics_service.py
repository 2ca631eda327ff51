"""
Sales Analytics Domain Service.

Trailing-range sales rollups over a resolved restaurant set: per day, per
hour of day, per item, per category and per staff member.
"""

from collections import defaultdict
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Order, Staff
from rest_api.repositories import (
    OrderFilters,
    TimeWindow,
    get_category_repository,
    get_order_repository,
    get_staff_repository,
)
from shared.config.constants import (
    ANALYTICS_FIRST_HOUR,
    ANALYTICS_HOUR_COUNT,
    ANALYTICS_TIME_RANGES,
    POPULAR_ITEMS_LIMIT,
    OrderStatus,
    ReportLabels,
)
from shared.config.logging import get_logger
from shared.utils.dates import as_utc
from shared.utils.exceptions import DatabaseError
from shared.utils.money import HUNDRED, TENTH, ZERO, money, to_decimal
from shared.utils.schemas import (
    AnalyticsHourPoint,
    CategoryShare,
    PopularItem,
    SalesAnalytics,
    SalesDayPoint,
    StaffPerformance,
)

logger = get_logger(__name__)

# Everything except cancelled orders counts as a sale
_SALE_STATUSES = [s for s in OrderStatus.ALL if s != OrderStatus.CANCELLED]


def hour_label(hour: int) -> str:
    """12-hour clock label: 9AM, 12PM, 10PM."""
    if hour == 0:
        return "12AM"
    if hour < 12:
        return f"{hour}AM"
    if hour == 12:
        return "12PM"
    return f"{hour - 12}PM"


class SalesAnalyticsService:
    """Domain service for sales analytics."""

    def __init__(self, db: Session):
        self._orders = get_order_repository(db)
        self._categories = get_category_repository(db)
        self._staff = get_staff_repository(db)

    def summarize(
        self,
        restaurant_ids: Sequence[int],
        time_range: str,
        now: datetime,
    ) -> SalesAnalytics:
        """
        Summarize sales created in the trailing ``time_range`` up to ``now``.

        Days and hours are bucketed in ``now``'s time zone. An empty
        restaurant set yields an empty summary without querying.
        """
        if not restaurant_ids:
            return SalesAnalytics(time_range=time_range)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        ids = list(restaurant_ids)
        window = TimeWindow(now - timedelta(days=ANALYTICS_TIME_RANGES[time_range]), now, inclusive_end=True)
        try:
            orders = self._orders.find_all(
                ids,
                OrderFilters(window=window, statuses=_SALE_STATUSES, with_items=True),
            )
            category_names = self._categories.names_by_id(ids)
        except SQLAlchemyError as e:
            raise DatabaseError(
                "fetch sales analytics",
                restaurant_ids=ids,
                window=window.describe(),
                error=str(e),
            ) from e

        total_revenue = sum((to_decimal(o.total_amount) for o in orders), ZERO)
        total_orders = len(orders)
        zone = now.tzinfo

        return SalesAnalytics(
            time_range=time_range,
            total_revenue=money(total_revenue),
            total_orders=total_orders,
            avg_order_value=money(total_revenue / total_orders) if total_orders else 0.0,
            sales_data=self._sales_by_day(orders, zone),
            hourly_data=self._sales_by_hour(orders, zone),
            popular_items=self._popular_items(orders, total_orders),
            category_data=self._category_shares(orders, category_names),
            staff_performance=self._staff_performance(orders, self._active_staff(ids)),
        )

    @staticmethod
    def _sales_by_day(orders: Sequence[Order], zone) -> list[SalesDayPoint]:
        days: dict[str, list] = {}
        for order in orders:
            key = as_utc(order.created_at).astimezone(zone).date().isoformat()
            entry = days.setdefault(key, [ZERO, 0])
            entry[0] += to_decimal(order.total_amount)
            entry[1] += 1

        return [
            SalesDayPoint(
                date=day,
                revenue=money(revenue),
                orders=count,
                avg_order=money(revenue / count),
            )
            for day, (revenue, count) in sorted(days.items())
        ]

    @staticmethod
    def _sales_by_hour(orders: Sequence[Order], zone) -> list[AnalyticsHourPoint]:
        counts: dict[int, int] = defaultdict(int)
        revenue: dict[int, Decimal] = defaultdict(lambda: ZERO)
        for order in orders:
            hour = as_utc(order.created_at).astimezone(zone).hour
            counts[hour] += 1
            revenue[hour] += to_decimal(order.total_amount)

        hours = range(ANALYTICS_FIRST_HOUR, ANALYTICS_FIRST_HOUR + ANALYTICS_HOUR_COUNT)
        return [
            AnalyticsHourPoint(hour=hour_label(h), orders=counts[h], revenue=money(revenue[h]))
            for h in hours
        ]

    @staticmethod
    def _popular_items(orders: Sequence[Order], total_orders: int) -> list[PopularItem]:
        """Top sellers by quantity; percentage is quantity per 100 orders."""
        stats: dict[str, list] = {}
        for order in orders:
            for line in order.items:
                name = line.menu_item.name if line.menu_item else ReportLabels.UNKNOWN_ITEM
                entry = stats.setdefault(name, [0, ZERO])
                entry[0] += line.quantity
                entry[1] += to_decimal(line.unit_price) * line.quantity

        ranked = sorted(stats.items(), key=lambda kv: (-kv[1][0], kv[0]))[:POPULAR_ITEMS_LIMIT]
        items = []
        for name, (quantity, item_revenue) in ranked:
            percentage = (Decimal(quantity) / total_orders * HUNDRED) if total_orders else ZERO
            items.append(
                PopularItem(
                    name=name,
                    orders=quantity,
                    revenue=money(item_revenue),
                    percentage=float(percentage.quantize(TENTH)),
                )
            )
        return items

    @staticmethod
    def _category_shares(orders: Sequence[Order], category_names: dict[int, str]) -> list[CategoryShare]:
        shares: dict[str, list] = {}
        for order in orders:
            for line in order.items:
                menu_item = line.menu_item
                name = ReportLabels.UNCATEGORIZED
                if menu_item is not None and menu_item.category_id in category_names:
                    name = category_names[menu_item.category_id]
                entry = shares.setdefault(name, [0, ZERO])
                entry[0] += line.quantity
                entry[1] += to_decimal(line.unit_price) * line.quantity

        ranked = sorted(shares.items(), key=lambda kv: (-kv[1][1], kv[0]))
        return [
            CategoryShare(name=name, value=quantity, revenue=money(revenue))
            for name, (quantity, revenue) in ranked
        ]

    def _active_staff(self, restaurant_ids: list[int]) -> Sequence[Staff]:
        try:
            return self._staff.find_active(restaurant_ids)
        except SQLAlchemyError as e:
            logger.warning(
                "Staff lookup unavailable, reporting no staff performance",
                restaurant_ids=restaurant_ids,
                error=str(e),
            )
            return []

    @staticmethod
    def _staff_performance(orders: Sequence[Order], staff: Sequence[Staff]) -> list[StaffPerformance]:
        """Orders and revenue credited to each active staff member via server_id."""
        taken: dict[int, list] = {}
        for order in orders:
            if order.server_id is None:
                continue
            entry = taken.setdefault(order.server_id, [0, ZERO])
            entry[0] += 1
            entry[1] += to_decimal(order.total_amount)

        rows = []
        for member in staff:
            count, revenue = taken.get(member.id, (0, ZERO))
            rows.append(
                StaffPerformance(
                    id=member.id,
                    name=member.full_name or ReportLabels.UNKNOWN_STAFF,
                    orders=count,
                    revenue=money(revenue),
                )
            )
        return sorted(rows, key=lambda r: (-r.revenue, r.name, r.id))
