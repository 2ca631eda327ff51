"""
Multi-Tenancy Models: Organization and Restaurant.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, BigInteger, Boolean, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import TimestampMixin, Base

if TYPE_CHECKING:
    from .user import Staff
    from .catalog import Category, MenuItem
    from .order import Order


class Organization(TimestampMixin, Base):
    """
    Top-level tenant. Owns zero or more restaurants.
    Created, updated and deleted by super_admin only.
    """

    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    restaurants: Mapped[list["Restaurant"]] = relationship(back_populates="organization")

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name='{self.name}')>"


class Restaurant(TimestampMixin, Base):
    """
    A physical restaurant. Belongs to exactly one organization.

    ``meta`` maps to the ``metadata`` column (the attribute name is taken by
    SQLAlchemy) and carries the tax configuration read by the end-of-day
    report: ``gst_rate`` and ``service_charge_rate`` as percentage strings,
    optionally ``gst_includes_service_charge``.
    """

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    organization_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("organizations.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    meta: Mapped[dict[str, Any]] = mapped_column("metadata", JSON, default=dict, nullable=False)
    timezone: Mapped[str] = mapped_column(Text, default="UTC", nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    organization: Mapped["Organization"] = relationship(back_populates="restaurants")
    staff: Mapped[list["Staff"]] = relationship(back_populates="restaurant")
    categories: Mapped[list["Category"]] = relationship(back_populates="restaurant")
    menu_items: Mapped[list["MenuItem"]] = relationship(back_populates="restaurant")
    orders: Mapped[list["Order"]] = relationship(back_populates="restaurant")

    def __repr__(self) -> str:
        return f"<Restaurant(id={self.id}, name='{self.name}', organization_id={self.organization_id})>"
