"""
Restaurant selector endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.repositories import get_restaurant_repository
from rest_api.services.permissions import Principal, accessible_restaurants, current_principal
from shared.infrastructure.db import get_db
from shared.utils.exceptions import DatabaseError
from shared.utils.schemas import RestaurantOutput


router = APIRouter(prefix="/api", tags=["restaurants"])


@router.get("/restaurants", response_model=list[RestaurantOutput])
def list_restaurants(
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> list[RestaurantOutput]:
    """Restaurants the caller may select."""
    try:
        restaurants = accessible_restaurants(get_restaurant_repository(db), principal)
    except SQLAlchemyError as e:
        raise DatabaseError("list restaurants", principal_id=principal.id, error=str(e)) from e

    return [
        RestaurantOutput(
            id=r.id,
            organization_id=r.organization_id,
            name=r.name,
            timezone=r.timezone,
            is_active=r.is_active,
        )
        for r in restaurants
    ]
