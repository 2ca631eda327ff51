"""
End-of-Day Report Domain Service.

Builds the closed-day financial report of one restaurant: completed orders,
tax and service charge, category/item rollups and payment method totals.
All arithmetic runs on Decimal; rounding happens once, on output.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Order, Restaurant
from rest_api.repositories import (
    TimeWindow,
    get_category_repository,
    get_order_repository,
    get_restaurant_repository,
)
from shared.config.constants import PaymentMethod, ReportLabels, ReportMetadataKeys
from shared.config.logging import reports_logger as logger
from shared.config.settings import settings
from shared.utils.dates import ONE_MILLISECOND, as_utc, day_start, get_zone, next_day_start
from shared.utils.exceptions import DatabaseError
from shared.utils.money import CENT, ZERO, floor_cents, money, percent_of, to_cents, to_decimal
from shared.utils.schemas import (
    BreakdownEntry,
    EndOfDayReport,
    PaymentMethodBreakdown,
    ReportOrderOutput,
    ReportSettings,
    ReportSummary,
)
from shared.utils.validators import parse_flag, parse_percentage


@dataclass(frozen=True)
class TaxConfig:
    """Tax settings of a restaurant, parsed from its metadata."""

    gst_rate: Decimal
    service_charge_rate: Decimal
    gst_includes_service_charge: bool
    gst_rate_raw: str
    service_charge_rate_raw: str

    @classmethod
    def from_metadata(cls, metadata: dict[str, Any] | None, restaurant_id: int) -> "TaxConfig":
        """
        Read tax settings from restaurant metadata.

        Missing rates count as 0. Unparseable rates raise ConfigurationError.
        """
        metadata = metadata or {}
        gst_raw = metadata.get(ReportMetadataKeys.GST_RATE)
        sc_raw = metadata.get(ReportMetadataKeys.SERVICE_CHARGE_RATE)
        return cls(
            gst_rate=parse_percentage(gst_raw, ReportMetadataKeys.GST_RATE, restaurant_id=restaurant_id),
            service_charge_rate=parse_percentage(
                sc_raw, ReportMetadataKeys.SERVICE_CHARGE_RATE, restaurant_id=restaurant_id
            ),
            gst_includes_service_charge=parse_flag(
                metadata.get(ReportMetadataKeys.GST_INCLUDES_SERVICE_CHARGE),
                settings.gst_includes_service_charge,
            ),
            gst_rate_raw=str(gst_raw) if gst_raw not in (None, "") else "0",
            service_charge_rate_raw=str(sc_raw) if sc_raw not in (None, "") else "0",
        )


@dataclass(frozen=True)
class ReportTotals:
    """Unrounded report totals."""

    subtotal: Decimal
    service_charge: Decimal
    gst_amount: Decimal
    grand_total: Decimal


def compute_totals(order_totals: Sequence[Decimal], tax: TaxConfig) -> ReportTotals:
    """
    Subtotal, service charge, GST and grand total at full precision.

    GST is charged on subtotal + service charge unless the restaurant
    (or the global default) says service charge is outside the GST base.
    """
    subtotal = sum(order_totals, ZERO)
    service_charge = percent_of(subtotal, tax.service_charge_rate)
    gst_base = subtotal + service_charge if tax.gst_includes_service_charge else subtotal
    gst_amount = percent_of(gst_base, tax.gst_rate)
    return ReportTotals(
        subtotal=subtotal,
        service_charge=service_charge,
        gst_amount=gst_amount,
        grand_total=subtotal + service_charge + gst_amount,
    )


def split_payment_methods(orders: Sequence[Order], totals: ReportTotals) -> PaymentMethodBreakdown:
    """
    Attribute the grand total to payment methods.

    Each order contributes its share of the grand total (pro rata by
    total_amount) to its recorded method; orders without one count as cash.
    Shares are truncated to cents and the leftover cents go to the methods
    with the largest truncated fractions (largest remainder), so the three
    values sum to the rounded grand total, none is negative and a method
    without orders stays at zero.
    """
    shares: dict[str, Decimal] = {}
    if totals.subtotal > ZERO:
        for order in orders:
            method = order.payment_method if order.payment_method in PaymentMethod.ALL else PaymentMethod.CASH
            shares[method] = shares.get(method, ZERO) + (
                totals.grand_total * to_decimal(order.total_amount) / totals.subtotal
            )

    split = {method: floor_cents(share) for method, share in shares.items()}
    leftover = int((to_cents(totals.grand_total) - sum(split.values(), ZERO)) / CENT)
    # Ties go to the fixed method order
    ranked = sorted(
        split,
        key=lambda m: (split[m] - shares[m], PaymentMethod.ALL.index(m)),
    )
    for i in range(leftover if ranked else 0):
        split[ranked[i % len(ranked)]] += CENT

    return PaymentMethodBreakdown(
        cash=float(split.get(PaymentMethod.CASH, ZERO)),
        card=float(split.get(PaymentMethod.CARD, ZERO)),
        digital=float(split.get(PaymentMethod.DIGITAL, ZERO)),
    )


class EndOfDayReportService:
    """Domain service for the end-of-day report. Read-only."""

    def __init__(self, db: Session):
        self._restaurants = get_restaurant_repository(db)
        self._orders = get_order_repository(db)
        self._categories = get_category_repository(db)

    def build_report(self, restaurant_id: int, report_date: date) -> EndOfDayReport:
        """
        Build the report for one restaurant and one calendar day.

        The day runs from 00:00:00.000 to 23:59:59.999 in the restaurant's
        time zone; orders count when they were completed inside it.

        Raises:
            DatabaseError: If a lookup fails.
            ConfigurationError: If the tax settings cannot be parsed.
        """
        try:
            restaurant = self._restaurants.get(restaurant_id)
        except SQLAlchemyError as e:
            raise DatabaseError(
                "load restaurant settings",
                restaurant_id=restaurant_id,
                date=report_date.isoformat(),
                error=str(e),
            ) from e

        tax = TaxConfig.from_metadata(restaurant.meta if restaurant else None, restaurant_id)
        window = self._day_window(restaurant, report_date)

        try:
            orders = self._orders.find_completed_in([restaurant_id], window, with_items=True)
            category_names = self._categories.names_by_id([restaurant_id])
        except SQLAlchemyError as e:
            raise DatabaseError(
                "build end-of-day report",
                restaurant_id=restaurant_id,
                date=report_date.isoformat(),
                window=window.describe(),
                error=str(e),
            ) from e

        totals = compute_totals([to_decimal(o.total_amount) for o in orders], tax)
        category_breakdown, item_breakdown = self._rollups(orders, category_names, restaurant_id)
        self._check_reconciliation(item_breakdown, totals.subtotal, restaurant_id, report_date)

        order_count = len(orders)
        average = totals.grand_total / order_count if order_count else ZERO

        logger.info(
            "End-of-day report built",
            restaurant_id=restaurant_id,
            date=report_date.isoformat(),
            orders=order_count,
        )

        return EndOfDayReport(
            date=report_date.isoformat(),
            restaurant_id=restaurant_id,
            summary=ReportSummary(
                total_orders=order_count,
                subtotal=money(totals.subtotal),
                service_charge=money(totals.service_charge),
                gst_amount=money(totals.gst_amount),
                grand_total=money(totals.grand_total),
                average_order_value=money(average),
            ),
            orders=[self._order_output(o) for o in orders],
            category_breakdown=self._entries(category_breakdown),
            item_breakdown=self._entries(item_breakdown),
            payment_methods=split_payment_methods(orders, totals),
            settings=ReportSettings(
                gst_rate=tax.gst_rate_raw,
                service_charge_rate=tax.service_charge_rate_raw,
                gst_includes_service_charge=tax.gst_includes_service_charge,
            ),
        )

    @staticmethod
    def _day_window(restaurant: Restaurant | None, report_date: date) -> TimeWindow:
        zone = get_zone(restaurant.timezone if restaurant else settings.business_timezone)
        return TimeWindow(
            day_start(report_date, zone),
            next_day_start(report_date, zone) - ONE_MILLISECOND,
            inclusive_end=True,
        )

    @staticmethod
    def _rollups(
        orders: Sequence[Order],
        category_names: dict[int, str],
        restaurant_id: int,
    ) -> tuple[dict[str, list], dict[str, list]]:
        """Per-category and per-item [total, count] over every order line."""
        categories: dict[str, list] = {}
        items: dict[str, list] = {}

        for order in orders:
            for line in order.items:
                menu_item = line.menu_item
                item_name = menu_item.name if menu_item else ReportLabels.UNKNOWN_ITEM
                category_name = ReportLabels.UNCATEGORIZED
                if menu_item is not None and menu_item.category_id in category_names:
                    category_name = category_names[menu_item.category_id]

                line_total = to_decimal(line.unit_price) * line.quantity
                if line.total_price is not None and to_decimal(line.total_price) != line_total:
                    logger.warning(
                        "Stored line total differs from quantity x unit price",
                        restaurant_id=restaurant_id,
                        order_id=order.id,
                        order_item_id=line.id,
                        stored=str(line.total_price),
                        computed=str(line_total),
                    )

                for bucket, key in ((categories, category_name), (items, item_name)):
                    entry = bucket.setdefault(key, [ZERO, 0])
                    entry[0] += line_total
                    entry[1] += line.quantity

        return categories, items

    @staticmethod
    def _check_reconciliation(
        item_breakdown: dict[str, list],
        subtotal: Decimal,
        restaurant_id: int,
        report_date: date,
    ) -> None:
        lines_total = sum((entry[0] for entry in item_breakdown.values()), ZERO)
        if lines_total != subtotal:
            logger.warning(
                "Order lines do not reconcile with order totals",
                restaurant_id=restaurant_id,
                date=report_date.isoformat(),
                lines_total=str(lines_total),
                subtotal=str(subtotal),
            )

    @staticmethod
    def _entries(rollup: dict[str, list]) -> dict[str, BreakdownEntry]:
        return {
            name: BreakdownEntry(total=money(total), count=count)
            for name, (total, count) in rollup.items()
        }

    @staticmethod
    def _order_output(order: Order) -> ReportOrderOutput:
        return ReportOrderOutput(
            id=order.id,
            total_amount=money(to_decimal(order.total_amount)),
            table_number=order.table_number,
            payment_method=order.payment_method,
            created_at=as_utc(order.created_at) if order.created_at else None,
            completed_at=as_utc(order.completed_at) if order.completed_at else None,
        )
