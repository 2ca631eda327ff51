"""
Shared Pydantic schemas used across the application.

Dashboard and analytics payloads are camelCase on the wire (the dashboard
client reads them that way); the end-of-day report keeps snake_case keys.
All outputs are frozen: a computed report is a value, not a mutable record.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Common Types
# =============================================================================

ScopeOutcomeName = Literal[
    "explicit",
    "fallback-single",
    "fallback-organization-wide",
    "none-selected",
    "denied",
]


class _CamelOutput(BaseModel):
    """Base for camelCase response bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class _Output(BaseModel):
    """Base for snake_case response bodies."""

    model_config = ConfigDict(frozen=True)


class ScopeOutput(_CamelOutput):
    """How the request was scoped to restaurants."""

    outcome: ScopeOutcomeName
    restaurant_ids: list[int] = Field(default_factory=list)


class RestaurantOutput(_Output):
    """Restaurant entry for the restaurant selector."""

    id: int
    organization_id: int
    name: str
    timezone: str
    is_active: bool


# =============================================================================
# Dashboard Metrics
# =============================================================================


class RecentOrderOutput(_CamelOutput):
    """One-line summary of a recent order."""

    id: int
    order_number: str
    table: str
    items: str
    total: float
    status: str
    item_count: int


class HourlyRevenuePoint(_CamelOutput):
    """Paid revenue within one local clock hour."""

    hour: str
    revenue: float


class DashboardMetrics(_CamelOutput):
    """Same-day operational metrics over a resolved restaurant set."""

    todays_revenue: float = 0.0
    revenue_change: float = 0.0
    active_orders: int = 0
    pending_orders: int = 0
    preparing_orders: int = 0
    staff_count: int = 0
    avg_order_time: float = 0.0
    recent_orders: list[RecentOrderOutput] = Field(default_factory=list)
    hourly_data: list[HourlyRevenuePoint] = Field(default_factory=list)
    scope: ScopeOutput | None = None


# =============================================================================
# End-of-Day Report
# =============================================================================


class ReportSummary(_Output):
    """Closed financial totals for the day."""

    total_orders: int
    subtotal: float
    service_charge: float
    gst_amount: float
    grand_total: float
    average_order_value: float


class BreakdownEntry(_Output):
    """Sales rollup for one category or item."""

    total: float
    count: int


class ReportOrderOutput(_Output):
    """A completed order included in the report."""

    id: int
    total_amount: float
    table_number: int | None = None
    payment_method: str | None = None
    created_at: datetime | None = None
    completed_at: datetime | None = None


class PaymentMethodBreakdown(_Output):
    """Fixed-shape payment method totals; always sums to the grand total."""

    cash: float = 0.0
    card: float = 0.0
    digital: float = 0.0


class ReportSettings(_Output):
    """Tax configuration the report was computed with."""

    gst_rate: str
    service_charge_rate: str
    gst_includes_service_charge: bool


class EndOfDayReport(_Output):
    """End-of-day financial report for one restaurant and one calendar day."""

    date: str
    restaurant_id: int
    summary: ReportSummary
    orders: list[ReportOrderOutput] = Field(default_factory=list)
    category_breakdown: dict[str, BreakdownEntry] = Field(default_factory=dict)
    item_breakdown: dict[str, BreakdownEntry] = Field(default_factory=dict)
    payment_methods: PaymentMethodBreakdown
    settings: ReportSettings


# =============================================================================
# Sales Analytics
# =============================================================================


class SalesDayPoint(_CamelOutput):
    """Revenue and order count for one local calendar day."""

    date: str
    revenue: float
    orders: int
    avg_order: float


class AnalyticsHourPoint(_CamelOutput):
    """Orders and revenue for one local clock hour over the whole range."""

    hour: str
    orders: int
    revenue: float


class PopularItem(_CamelOutput):
    """Top seller by quantity."""

    name: str
    orders: int
    revenue: float
    percentage: float


class CategoryShare(_CamelOutput):
    """Quantity and revenue sold per category."""

    name: str
    value: int
    revenue: float


class StaffPerformance(_CamelOutput):
    """Orders taken and revenue per active staff member."""

    id: int
    name: str
    orders: int
    revenue: float


class SalesAnalytics(_CamelOutput):
    """Sales rollup over a trailing time range."""

    time_range: str
    total_revenue: float = 0.0
    total_orders: int = 0
    avg_order_value: float = 0.0
    sales_data: list[SalesDayPoint] = Field(default_factory=list)
    hourly_data: list[AnalyticsHourPoint] = Field(default_factory=list)
    popular_items: list[PopularItem] = Field(default_factory=list)
    category_data: list[CategoryShare] = Field(default_factory=list)
    staff_performance: list[StaffPerformance] = Field(default_factory=list)
    scope: ScopeOutput | None = None
