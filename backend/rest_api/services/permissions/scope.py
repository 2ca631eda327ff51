"""
Access scope resolution.

Maps (principal, optional requested restaurant) to the set of restaurants a
request may read, together with how that set was chosen. The resolver is a
pure policy over an injected RestaurantDirectory: it performs at most two
directory lookups, never retries with a second round, and never raises for
policy reasons. Directory failures propagate to the caller.

Usage:
    resolver = AccessScopeResolver(get_restaurant_repository(db))
    decision = resolver.resolve(principal, requested_restaurant_id=7)
    if decision.outcome is ScopeOutcome.DENIED:
        raise NoRestaurantAccessError()
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Sequence, assert_never

from rest_api.models import Restaurant
from shared.config.constants import Role
from .context import Principal


class ScopeOutcome(str, Enum):
    """How the restaurant set of a decision was arrived at."""

    EXPLICIT = "explicit"
    FALLBACK_SINGLE = "fallback-single"
    FALLBACK_ORGANIZATION_WIDE = "fallback-organization-wide"
    NONE_SELECTED = "none-selected"
    DENIED = "denied"


@dataclass(frozen=True)
class AccessDecision:
    """Result of scope resolution. Lives for one request."""

    outcome: ScopeOutcome
    restaurant_ids: tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.restaurant_ids


class RestaurantDirectory(Protocol):
    """Lookups the resolver is allowed to perform."""

    def find_restaurant(
        self,
        restaurant_id: int,
        organization_id: int | None = None,
    ) -> Restaurant | None:
        ...

    def list_restaurants(self, organization_id: int) -> Sequence[Restaurant]:
        ...


class RestaurantCatalog(RestaurantDirectory, Protocol):
    """Directory that can also enumerate every active restaurant."""

    def list_all_active(self) -> Sequence[Restaurant]:
        ...


DENIED = AccessDecision(ScopeOutcome.DENIED)
NONE_SELECTED = AccessDecision(ScopeOutcome.NONE_SELECTED)


class AccessScopeResolver:
    """Tenant-scoping policy."""

    def __init__(self, directory: RestaurantDirectory):
        self._directory = directory

    def resolve(
        self,
        principal: Principal,
        requested_restaurant_id: int | None = None,
    ) -> AccessDecision:
        """
        Decide which restaurants the principal may read for this request.

        Requested id present:
        - super_admin: unconditional lookup, explicit when it exists.
        - org_admin: lookup constrained to its organization, explicit when
          owned, otherwise the whole organization.
        - restaurant-scoped roles: explicit only for their own restaurant,
          otherwise their own restaurant (no lookup).
        No requested id: org-scoped roles select nothing, restaurant-scoped
        roles fall back to their own restaurant.
        """
        role = principal.role
        match role:
            case Role.SUPER_ADMIN:
                return self._resolve_super_admin(requested_restaurant_id)
            case Role.ORG_ADMIN:
                return self._resolve_org_admin(principal.organization_id, requested_restaurant_id)
            case Role.MANAGER | Role.SERVER | Role.KITCHEN | Role.CASHIER:
                return self._resolve_restaurant_scoped(principal.restaurant_id, requested_restaurant_id)
            case _:
                assert_never(role)

    def _resolve_super_admin(self, requested: int | None) -> AccessDecision:
        if requested is None:
            return NONE_SELECTED
        if self._directory.find_restaurant(requested) is not None:
            return AccessDecision(ScopeOutcome.EXPLICIT, (requested,))
        return NONE_SELECTED

    def _resolve_org_admin(self, organization_id: int | None, requested: int | None) -> AccessDecision:
        match (organization_id, requested):
            case (None, _):
                return DENIED
            case (_, None):
                return NONE_SELECTED
            case (int() as org_id, int() as restaurant_id):
                found = self._directory.find_restaurant(restaurant_id, organization_id=org_id)
                if found is not None:
                    return AccessDecision(ScopeOutcome.EXPLICIT, (restaurant_id,))
                restaurants = self._directory.list_restaurants(org_id)
                return AccessDecision(
                    ScopeOutcome.FALLBACK_ORGANIZATION_WIDE,
                    tuple(r.id for r in restaurants),
                )
        return DENIED

    def _resolve_restaurant_scoped(self, own: int | None, requested: int | None) -> AccessDecision:
        if own is None:
            return DENIED
        if requested is not None and requested == own:
            return AccessDecision(ScopeOutcome.EXPLICIT, (own,))
        return AccessDecision(ScopeOutcome.FALLBACK_SINGLE, (own,))


def accessible_restaurants(catalog: RestaurantCatalog, principal: Principal) -> list[Restaurant]:
    """
    Restaurants the principal may pick from in a selector.

    super_admin sees every active restaurant, org_admin its organization's,
    restaurant-scoped roles their own. Misconfigured accounts see nothing.
    """
    match principal.role:
        case Role.SUPER_ADMIN:
            return list(catalog.list_all_active())
        case Role.ORG_ADMIN:
            if principal.organization_id is None:
                return []
            return list(catalog.list_restaurants(principal.organization_id))
        case Role.MANAGER | Role.SERVER | Role.KITCHEN | Role.CASHIER:
            if principal.restaurant_id is None:
                return []
            restaurant = catalog.find_restaurant(principal.restaurant_id)
            return [restaurant] if restaurant is not None else []
        case _:
            assert_never(principal.role)
