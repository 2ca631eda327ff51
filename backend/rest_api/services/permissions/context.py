"""
Principal - the verified caller of a request.

Built once per request from the token claims and passed explicitly into the
access resolver; nothing downstream reads ambient user state.
"""

from dataclasses import dataclass
from typing import Any

from fastapi import Depends

from shared.config.constants import Role, ORGANIZATION_SCOPED_ROLES
from shared.security.auth import current_user_context


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class Principal:
    """
    Authenticated staff member.

    Organization-scoped roles carry organization_id; restaurant-scoped
    roles carry restaurant_id. Either may be None on a misconfigured
    account, which the resolver treats as "no access".
    """

    id: int
    role: Role
    organization_id: int | None = None
    restaurant_id: int | None = None
    email: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Principal":
        """
        Build a principal from verified JWT claims.

        A token without a role claim is treated as a server account.
        """
        return cls(
            id=int(claims["sub"]),
            role=Role(claims.get("role") or Role.SERVER.value),
            organization_id=_optional_int(claims.get("organization_id")),
            restaurant_id=_optional_int(claims.get("restaurant_id")),
            email=claims.get("email"),
        )

    @property
    def is_organization_scoped(self) -> bool:
        return self.role in ORGANIZATION_SCOPED_ROLES


def current_principal(claims: dict = Depends(current_user_context)) -> Principal:
    """
    FastAPI dependency returning the calling Principal.

    Usage:
        @router.get("/dashboard/metrics")
        def metrics(principal: Principal = Depends(current_principal)):
            ...
    """
    return Principal.from_claims(claims)
