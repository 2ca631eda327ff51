"""
API routers.

- public: health checks (no authentication)
- dashboard: /api/dashboard/metrics
- reports: /api/reports/end-of-day
- analytics: /api/analytics
- restaurants: /api/restaurants
"""

from .public import health_router
from .dashboard import router as dashboard_router
from .reports import router as reports_router
from .analytics import router as analytics_router
from .restaurants import router as restaurants_router

__all__ = [
    "health_router",
    "dashboard_router",
    "reports_router",
    "analytics_router",
    "restaurants_router",
]
