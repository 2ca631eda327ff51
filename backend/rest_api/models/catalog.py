"""
Menu Models: Category, MenuItem.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, Boolean, ForeignKey, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import TimestampMixin, Base

if TYPE_CHECKING:
    from .tenant import Restaurant


class Category(TimestampMixin, Base):
    """Menu category, scoped to one restaurant."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurants.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)

    restaurant: Mapped["Restaurant"] = relationship(back_populates="categories")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', restaurant_id={self.restaurant_id})>"


class MenuItem(TimestampMixin, Base):
    """
    A sellable menu item.

    category_id is not a hard foreign key: categories can be removed while
    historical orders still reference the item, and reports then bucket it
    under "Uncategorized".
    """

    __tablename__ = "menu_items"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurants.id"), nullable=False, index=True
    )
    category_id: Mapped[Optional[int]] = mapped_column(BigInteger, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    restaurant: Mapped["Restaurant"] = relationship(back_populates="menu_items")

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, name='{self.name}', category_id={self.category_id})>"
