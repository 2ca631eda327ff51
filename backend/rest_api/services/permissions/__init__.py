"""
Tenant scoping for restaurant-bound reads.

Usage:
    from rest_api.services.permissions import AccessScopeResolver, Principal, current_principal

    @router.get("/dashboard/metrics")
    def metrics(principal: Principal = Depends(current_principal), db: Session = Depends(get_db)):
        decision = AccessScopeResolver(get_restaurant_repository(db)).resolve(principal, 7)
"""

from .context import Principal, current_principal
from .scope import (
    AccessDecision,
    AccessScopeResolver,
    RestaurantCatalog,
    RestaurantDirectory,
    ScopeOutcome,
    accessible_restaurants,
)

__all__ = [
    # Principal
    "Principal",
    "current_principal",
    # Scope
    "AccessDecision",
    "AccessScopeResolver",
    "RestaurantCatalog",
    "RestaurantDirectory",
    "ScopeOutcome",
    "accessible_restaurants",
]
