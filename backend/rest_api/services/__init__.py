"""
Services module for business logic.

- domain/: Reporting services (metrics, end-of-day report, analytics)
- permissions/: Principal and tenant scope resolution

Usage:
    from rest_api.services.domain import EndOfDayReportService
    report = EndOfDayReportService(db).build_report(restaurant_id, report_date)
"""

from .permissions import (
    AccessDecision,
    AccessScopeResolver,
    Principal,
    ScopeOutcome,
    accessible_restaurants,
    current_principal,
)

from .domain import (
    MetricsService,
    EndOfDayReportService,
    SalesAnalyticsService,
)

__all__ = [
    # Permissions
    "AccessDecision",
    "AccessScopeResolver",
    "Principal",
    "ScopeOutcome",
    "accessible_restaurants",
    "current_principal",
    # Domain services
    "MetricsService",
    "EndOfDayReportService",
    "SalesAnalyticsService",
]
