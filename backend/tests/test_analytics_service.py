"""
Tests for the sales analytics service.
"""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.exc import OperationalError

from rest_api.models import MenuItem
from rest_api.repositories import OrderRepository, StaffRepository
from rest_api.services.domain import SalesAnalyticsService
from rest_api.services.domain.analytics_service import hour_label
from shared.config.constants import OrderStatus, PaymentStatus
from shared.utils.exceptions import DatabaseError
from tests.conftest import NOW, make_order


@pytest.fixture
def week(db_session, seed_menu):
    """Two sales inside the last week plus a cancelled and an old order."""
    burger, laksa, tea = seed_menu["burger"], seed_menu["laksa"], seed_menu["tea"]
    make_order(db_session, 10, [(burger, 2, "10.00"), (tea, 1, "5.50")])
    make_order(
        db_session, 10, [(laksa, 1, "20.00")],
        created_at=datetime(2026, 10, 17, 10, 15, tzinfo=timezone.utc),
        status=OrderStatus.PENDING, payment_status=PaymentStatus.UNPAID,
    )
    make_order(
        db_session, 10, [(burger, 5, "10.00")],
        created_at=NOW - timedelta(hours=3),
        status=OrderStatus.CANCELLED, payment_status=PaymentStatus.REFUNDED,
    )
    make_order(db_session, 10, [(burger, 9, "10.00")], created_at=NOW - timedelta(days=8))
    db_session.commit()


class TestTotals:

    def test_totals_exclude_cancelled_and_out_of_range(self, db_session, week):
        analytics = SalesAnalyticsService(db_session).summarize([10], "7d", NOW)

        assert analytics.time_range == "7d"
        assert analytics.total_revenue == 45.50
        assert analytics.total_orders == 2
        assert analytics.avg_order_value == 22.75

    def test_range_start_is_inclusive(self, db_session, seed_menu):
        burger = seed_menu["burger"]
        make_order(db_session, 10, [(burger, 1, "10.00")], created_at=NOW - timedelta(days=1))
        make_order(db_session, 10, [(burger, 1, "10.00")], created_at=NOW - timedelta(days=1, seconds=1))
        db_session.commit()

        assert SalesAnalyticsService(db_session).summarize([10], "1d", NOW).total_orders == 1

    def test_empty_scope_returns_empty_summary(self, db_session, week):
        with patch.object(OrderRepository, "find_all") as find_all:
            analytics = SalesAnalyticsService(db_session).summarize([], "30d", NOW)

        find_all.assert_not_called()
        assert analytics.time_range == "30d"
        assert analytics.total_orders == 0
        assert analytics.hourly_data == []

    def test_lookup_failure_raises_database_error(self, db_session, seed_tenants):
        error = OperationalError("SELECT", {}, Exception("down"))
        with patch.object(OrderRepository, "find_all", side_effect=error):
            with pytest.raises(DatabaseError):
                SalesAnalyticsService(db_session).summarize([10], "7d", NOW)


class TestSeries:

    def test_sales_by_day(self, db_session, week):
        analytics = SalesAnalyticsService(db_session).summarize([10], "7d", NOW)

        assert [p.model_dump(by_alias=True) for p in analytics.sales_data] == [
            {"date": "2026-10-17", "revenue": 20.00, "orders": 1, "avgOrder": 20.00},
            {"date": "2026-10-19", "revenue": 25.50, "orders": 1, "avgOrder": 25.50},
        ]

    def test_hourly_series_covers_nine_to_ten_pm(self, db_session, week):
        hourly = SalesAnalyticsService(db_session).summarize([10], "7d", NOW).hourly_data

        assert len(hourly) == 14
        assert hourly[0].hour == "9AM"
        assert hourly[-1].hour == "10PM"
        by_hour = {p.hour: p for p in hourly}
        assert (by_hour["1PM"].orders, by_hour["1PM"].revenue) == (1, 25.50)
        assert (by_hour["10AM"].orders, by_hour["10AM"].revenue) == (1, 20.00)
        assert by_hour["12PM"].orders == 0

    def test_buckets_follow_the_clock_zone(self, db_session, seed_menu):
        make_order(
            db_session, 10, [(seed_menu["burger"], 1, "10.00")],
            created_at=datetime(2026, 10, 18, 17, 0, tzinfo=timezone.utc),
        )
        db_session.commit()

        singapore_now = NOW.astimezone(ZoneInfo("Asia/Singapore"))
        analytics = SalesAnalyticsService(db_session).summarize([10], "7d", singapore_now)

        # 17:00 UTC on the 18th is 01:00 on the 19th in Singapore
        assert [p.date for p in analytics.sales_data] == ["2026-10-19"]
        assert sum(p.orders for p in analytics.hourly_data) == 0


class TestRankings:

    def test_popular_items(self, db_session, week):
        popular = SalesAnalyticsService(db_session).summarize([10], "7d", NOW).popular_items

        assert [(p.name, p.orders, p.revenue, p.percentage) for p in popular] == [
            ("Burger", 2, 20.00, 100.0),
            ("Iced Tea", 1, 5.50, 50.0),
            ("Laksa", 1, 20.00, 50.0),
        ]

    def test_popular_items_keep_top_five(self, db_session, seed_tenants):
        items = [
            MenuItem(id=220 + n, restaurant_id=10, category_id=100, name=f"Dish {n}", price=Decimal("1.00"))
            for n in range(7)
        ]
        db_session.add_all(items)
        db_session.flush()
        make_order(db_session, 10, [(item, n + 1, "1.00") for n, item in enumerate(items)])
        db_session.commit()

        popular = SalesAnalyticsService(db_session).summarize([10], "7d", NOW).popular_items
        assert [p.name for p in popular] == ["Dish 6", "Dish 5", "Dish 4", "Dish 3", "Dish 2"]

    def test_categories_ranked_by_revenue(self, db_session, week):
        categories = SalesAnalyticsService(db_session).summarize([10], "7d", NOW).category_data

        assert [(c.name, c.value, c.revenue) for c in categories] == [
            ("Mains", 3, 40.00),
            ("Drinks", 1, 5.50),
        ]


class TestStaffPerformance:
    """Orders and revenue credited to active staff through server_id."""

    @pytest.fixture
    def served(self, db_session, seed_menu, seed_staff):
        burger, laksa, tea = seed_menu["burger"], seed_menu["laksa"], seed_menu["tea"]
        make_order(db_session, 10, [(burger, 1, "10.00")], server_id=300)
        make_order(db_session, 10, [(laksa, 1, "20.00")], server_id=300)
        make_order(db_session, 10, [(tea, 1, "5.50")], server_id=301)
        # Inactive staff, unattributed and cancelled orders earn no credit
        make_order(db_session, 10, [(burger, 1, "10.00")], server_id=302)
        make_order(db_session, 10, [(burger, 1, "10.00")])
        make_order(
            db_session, 10, [(burger, 4, "10.00")], server_id=301,
            status=OrderStatus.CANCELLED, payment_status=PaymentStatus.REFUNDED,
        )
        db_session.commit()

    def test_active_staff_ranked_by_revenue(self, db_session, served):
        staff = SalesAnalyticsService(db_session).summarize([10], "7d", NOW).staff_performance

        assert [(s.id, s.name, s.orders, s.revenue) for s in staff] == [
            (300, "A", 2, 30.00),
            (301, "B", 1, 5.50),
        ]

    def test_staff_without_orders_are_listed_with_zeroes(self, db_session, served):
        staff = SalesAnalyticsService(db_session).summarize([10, 11], "7d", NOW).staff_performance

        assert [s.name for s in staff] == ["A", "B", "D"]
        assert (staff[-1].orders, staff[-1].revenue) == (0, 0.0)

    def test_staff_lookup_failure_degrades_to_empty(self, db_session, served, caplog):
        error = OperationalError("SELECT", {}, Exception("down"))
        with patch.object(StaffRepository, "find_active", side_effect=error):
            with caplog.at_level(logging.WARNING):
                analytics = SalesAnalyticsService(db_session).summarize([10], "7d", NOW)

        assert analytics.staff_performance == []
        assert analytics.total_orders == 5
        assert "Staff lookup unavailable, reporting no staff performance" in caplog.messages


class TestHourLabel:

    @pytest.mark.parametrize(
        "hour,label",
        [(0, "12AM"), (9, "9AM"), (11, "11AM"), (12, "12PM"), (13, "1PM"), (22, "10PM")],
    )
    def test_twelve_hour_clock(self, hour, label):
        assert hour_label(hour) == label
