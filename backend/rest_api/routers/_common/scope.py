"""
Request scoping helpers shared by the restaurant-bound routers.
"""

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.repositories import get_restaurant_repository
from rest_api.services.permissions import AccessDecision, AccessScopeResolver, Principal
from shared.config.logging import audit_scope_decision
from shared.utils.dates import business_now
from shared.utils.exceptions import DatabaseError
from shared.utils.schemas import ScopeOutput


def get_now() -> datetime:
    """Clock dependency; overridden in tests."""
    return business_now()


def resolve_scope(
    db: Session,
    principal: Principal,
    requested_restaurant_id: int | None,
) -> AccessDecision:
    """
    Resolve and audit the restaurant scope of a request.

    Raises:
        DatabaseError: If a directory lookup fails.
    """
    resolver = AccessScopeResolver(get_restaurant_repository(db))
    try:
        decision = resolver.resolve(principal, requested_restaurant_id)
    except SQLAlchemyError as e:
        raise DatabaseError(
            "resolve restaurant scope",
            principal_id=principal.id,
            requested_restaurant_id=requested_restaurant_id,
            error=str(e),
        ) from e

    audit_scope_decision(
        principal.id,
        principal.role.value,
        requested_restaurant_id,
        decision.outcome.value,
        decision.restaurant_ids,
    )
    return decision


def scope_output(decision: AccessDecision) -> ScopeOutput:
    return ScopeOutput(outcome=decision.outcome.value, restaurant_ids=list(decision.restaurant_ids))
