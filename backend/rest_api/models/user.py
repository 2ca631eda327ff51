"""
Staff Model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import TimestampMixin, Base

if TYPE_CHECKING:
    from .tenant import Restaurant


class Staff(TimestampMixin, Base):
    """
    A staff account.

    Org-scoped roles (super_admin, org_admin) carry organization_id;
    restaurant-scoped roles (manager, server, kitchen, cashier) carry
    restaurant_id. Either may be missing on a misconfigured account.
    """

    __tablename__ = "staff"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    organization_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("organizations.id"), index=True
    )
    restaurant_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("restaurants.id"), index=True
    )
    full_name: Mapped[Optional[str]] = mapped_column(Text)
    email: Mapped[Optional[str]] = mapped_column(Text)
    role: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    restaurant: Mapped[Optional["Restaurant"]] = relationship(back_populates="staff")

    __table_args__ = (
        # Dashboard staff count: restaurant + role + active
        Index("ix_staff_restaurant_role_active", "restaurant_id", "role", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<Staff(id={self.id}, role='{self.role}', restaurant_id={self.restaurant_id})>"
