"""
Sales analytics endpoint.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.routers._common import get_now, resolve_scope, scope_output
from rest_api.services.domain import SalesAnalyticsService
from rest_api.services.permissions import Principal, ScopeOutcome, current_principal
from shared.infrastructure.db import get_db
from shared.utils.exceptions import NoRestaurantAccessError
from shared.utils.schemas import SalesAnalytics
from shared.utils.validators import validate_time_range


router = APIRouter(prefix="/api", tags=["analytics"])


@router.get("/analytics", response_model=SalesAnalytics, response_model_by_alias=True)
def get_sales_analytics(
    restaurant_id: int | None = Query(default=None, alias="restaurantId"),
    time_range: str | None = Query(default=None, alias="timeRange"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
    now: datetime = Depends(get_now),
) -> SalesAnalytics:
    """Sales rollup over a trailing range (1d, 7d, 30d, 90d)."""
    time_range = validate_time_range(time_range)

    decision = resolve_scope(db, principal, restaurant_id)
    if decision.outcome is ScopeOutcome.DENIED:
        raise NoRestaurantAccessError(principal_id=principal.id, role=principal.role.value)

    analytics = SalesAnalyticsService(db).summarize(decision.restaurant_ids, time_range, now)
    return analytics.model_copy(update={"scope": scope_output(decision)})
