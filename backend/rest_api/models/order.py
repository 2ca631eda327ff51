"""
Order Models: Order, OrderItem.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import TimestampMixin, Base

if TYPE_CHECKING:
    from .tenant import Restaurant
    from .catalog import MenuItem


class Order(TimestampMixin, Base):
    """
    A customer order at one restaurant.

    Owns its items: they are created with the order, replaced wholesale on
    edit and deleted with it.
    status: pending, confirmed, preparing, ready, served, completed, cancelled
    payment_status: unpaid, paid, refunded
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurants.id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(Text, default="pending", nullable=False, index=True)
    payment_status: Mapped[str] = mapped_column(Text, default="unpaid", nullable=False)
    # cash, card, digital; None when the till did not record it
    payment_method: Mapped[Optional[str]] = mapped_column(Text)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    table_number: Mapped[Optional[int]] = mapped_column(Integer)
    customer_name: Mapped[Optional[str]] = mapped_column(Text)
    # Staff member who took the order; None for counter and online orders
    server_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("staff.id"), index=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), index=True)

    restaurant: Mapped["Restaurant"] = relationship(back_populates="orders")
    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    __table_args__ = (
        # Dashboard revenue windows (restaurant + created_at)
        Index("ix_orders_restaurant_created", "restaurant_id", "created_at"),
        # Active order counts (restaurant + status)
        Index("ix_orders_restaurant_status", "restaurant_id", "status"),
        # End-of-day report (restaurant + status + completed_at)
        Index("ix_orders_restaurant_status_completed", "restaurant_id", "status", "completed_at"),
        CheckConstraint("total_amount >= 0", name="chk_orders_total_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}', restaurant_id={self.restaurant_id})>"


class OrderItem(TimestampMixin, Base):
    """
    A line of an order.

    Stores the price at the time of order. total_price is expected to equal
    quantity * unit_price; reports recompute it instead of trusting it.
    """

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_item_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("menu_items.id"), index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    special_instructions: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_order_item_quantity_positive"),
        CheckConstraint("unit_price >= 0", name="chk_order_item_price_non_negative"),
    )

    order: Mapped["Order"] = relationship(back_populates="items")
    menu_item: Mapped[Optional["MenuItem"]] = relationship()

    def __repr__(self) -> str:
        return f"<OrderItem(id={self.id}, order_id={self.order_id}, qty={self.quantity})>"
