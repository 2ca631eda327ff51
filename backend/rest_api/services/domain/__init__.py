"""
Domain Services - Clean Architecture Application Layer.

Services hold the reporting logic and work over an already-resolved
restaurant set. They use Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import MetricsService

    # In router
    metrics = MetricsService(db).compute_daily_metrics(decision.restaurant_ids, now)
"""

from .metrics_service import MetricsService
from .report_service import EndOfDayReportService
from .analytics_service import SalesAnalyticsService

__all__ = [
    "MetricsService",
    "EndOfDayReportService",
    "SalesAnalyticsService",
]
