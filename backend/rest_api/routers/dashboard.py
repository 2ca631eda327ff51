"""
Dashboard endpoints.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.routers._common import get_now, resolve_scope, scope_output
from rest_api.services.domain import MetricsService
from rest_api.services.permissions import Principal, ScopeOutcome, current_principal
from shared.infrastructure.db import get_db
from shared.utils.exceptions import NoRestaurantAccessError
from shared.utils.schemas import DashboardMetrics


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/metrics", response_model=DashboardMetrics, response_model_by_alias=True)
def get_dashboard_metrics(
    restaurant_id: int | None = Query(default=None, alias="restaurantId"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
    now: datetime = Depends(get_now),
) -> DashboardMetrics:
    """
    Same-day metrics for the requested restaurant, or the caller's fallback scope.

    An org-level caller without a selection gets zeroed metrics.
    """
    decision = resolve_scope(db, principal, restaurant_id)
    if decision.outcome is ScopeOutcome.DENIED:
        raise NoRestaurantAccessError(principal_id=principal.id, role=principal.role.value)

    metrics = MetricsService(db).compute_daily_metrics(decision.restaurant_ids, now)
    return metrics.model_copy(update={"scope": scope_output(decision)})
