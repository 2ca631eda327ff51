"""
Base Repository implementation.
Provides common read-side data access with restaurant scoping.

Repositories are the capabilities the reporting services are handed: every
query is filtered by an explicit restaurant-id set, never by ambient state.
Driver errors (SQLAlchemyError) propagate unchanged; the calling service
knows the restaurant set and time window and wraps them with that context.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TypeVar, Generic, Any, Sequence

from sqlalchemy import Select
from sqlalchemy.orm import Session

from shared.utils.dates import as_utc


ModelT = TypeVar("ModelT")


@dataclass(frozen=True)
class TimeWindow:
    """
    A time range used to filter a timestamp column.

    ``start`` is inclusive. ``end`` is exclusive unless ``inclusive_end``.
    Bounds are converted to UTC before they reach the database.
    """

    start: datetime
    end: datetime
    inclusive_end: bool = False

    def apply(self, query: Select, column: Any) -> Select:
        query = query.where(column >= as_utc(self.start))
        if self.inclusive_end:
            return query.where(column <= as_utc(self.end))
        return query.where(column < as_utc(self.end))

    def describe(self) -> dict[str, str]:
        """Loggable form of the window."""
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: Return the SQLAlchemy model class
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    def _all(self, query: Select) -> Sequence[ModelT]:
        return self._db.execute(query).scalars().unique().all()


class RestaurantScopedRepository(BaseRepository[ModelT]):
    """Repository for models that carry a restaurant_id column."""

    def _scope(self, query: Select, restaurant_ids: Sequence[int]) -> Select:
        column = self.model.restaurant_id
        if len(restaurant_ids) == 1:
            return query.where(column == restaurant_ids[0])
        return query.where(column.in_(list(restaurant_ids)))
