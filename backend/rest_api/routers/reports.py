"""
End-of-day report endpoint.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.routers._common import get_now, resolve_scope
from rest_api.services.domain import EndOfDayReportService
from rest_api.services.permissions import Principal, ScopeOutcome, current_principal
from shared.infrastructure.db import get_db
from shared.utils.exceptions import MissingParameterError, RestaurantAccessError
from shared.utils.schemas import EndOfDayReport
from shared.utils.validators import parse_report_date


router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/end-of-day", response_model=EndOfDayReport)
def get_end_of_day_report(
    restaurant_id: int | None = Query(default=None),
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
    now: datetime = Depends(get_now),
) -> EndOfDayReport:
    """
    Closed-day financial report for one restaurant.

    The caller must be entitled to exactly the requested restaurant; a
    fallback scope is not good enough for a financial report.
    """
    if restaurant_id is None:
        raise MissingParameterError("restaurant_id")
    report_date = parse_report_date(date, default=now.date())

    decision = resolve_scope(db, principal, restaurant_id)
    if decision.outcome is not ScopeOutcome.EXPLICIT:
        raise RestaurantAccessError(
            restaurant_id,
            principal_id=principal.id,
            outcome=decision.outcome.value,
        )

    return EndOfDayReportService(db).build_report(restaurant_id, report_date)
