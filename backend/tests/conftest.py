"""
Pytest configuration and fixtures for backend tests.
"""

import os

# The application engine is built at import time; keep it off Postgres.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import itertools
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.routers._common import get_now
from shared.infrastructure.db import get_db
from rest_api.models import (
    Base, Organization, Restaurant, Staff, Category, MenuItem, Order, OrderItem,
)
from shared.config.constants import OrderStatus, PaymentStatus, Role
from shared.security.auth import sign_jwt


# ID counter for SQLite BigInteger compatibility
# SQLite doesn't auto-increment BigInteger, so we need to manage IDs manually
_id_counter = itertools.count(1000)


def next_id() -> int:
    """Get next unique ID for test entities."""
    return next(_id_counter)


# Fixed clock: Monday 19 October 2026, 14:30 UTC
NOW = datetime(2026, 10, 19, 14, 30, tzinfo=timezone.utc)
TODAY_START = datetime(2026, 10, 19, tzinfo=timezone.utc)
YESTERDAY_START = TODAY_START - timedelta(days=1)


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session and clock overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def statement_counter():
    """Collect SQL statements issued on the test engine."""
    statements = []

    def _record(conn, cursor, statement, *args):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", _record)
    yield statements
    event.remove(engine, "before_cursor_execute", _record)


# =============================================================================
# Entity builders
# =============================================================================


def make_order(
    db,
    restaurant_id: int,
    lines: list[tuple[MenuItem | None, int, str]],
    created_at: datetime = NOW - timedelta(hours=1),
    status: str = OrderStatus.COMPLETED,
    payment_status: str = PaymentStatus.PAID,
    payment_method: str | None = None,
    completed_at: datetime | None = None,
    table_number: int | None = None,
    total_amount: Decimal | None = None,
    server_id: int | None = None,
) -> Order:
    """
    Add an order with one line per (menu_item, quantity, unit_price).

    total_amount defaults to the sum of the lines; completed orders default
    to completing twenty minutes after creation.
    """
    order = Order(
        id=next_id(),
        restaurant_id=restaurant_id,
        status=status,
        payment_status=payment_status,
        payment_method=payment_method,
        table_number=table_number,
        server_id=server_id,
        created_at=created_at,
    )
    if status == OrderStatus.COMPLETED:
        order.completed_at = completed_at or created_at + timedelta(minutes=20)

    total = Decimal("0")
    for menu_item, quantity, unit_price in lines:
        line_total = Decimal(unit_price) * quantity
        order.items.append(
            OrderItem(
                id=next_id(),
                menu_item_id=menu_item.id if menu_item else None,
                quantity=quantity,
                unit_price=Decimal(unit_price),
                total_price=line_total,
            )
        )
        total += line_total
    order.total_amount = total if total_amount is None else total_amount
    db.add(order)
    db.flush()
    return order


def bearer(
    role: Role,
    staff_id: int = 1,
    organization_id: int | None = None,
    restaurant_id: int | None = None,
) -> dict[str, str]:
    """Authorization header for a principal."""
    claims = {"sub": str(staff_id), "role": role.value}
    if organization_id is not None:
        claims["organization_id"] = organization_id
    if restaurant_id is not None:
        claims["restaurant_id"] = restaurant_id
    return {"Authorization": f"Bearer {sign_jwt(claims)}"}


# =============================================================================
# Tenant fixtures
# =============================================================================


@pytest.fixture
def seed_tenants(db_session):
    """
    Two organizations.

    Org 1 owns restaurants 10 and 11, org 2 owns restaurant 20. Restaurant
    10 charges 10% service and 8% GST.
    """
    db_session.add_all([
        Organization(id=1, name="Org One"),
        Organization(id=2, name="Org Two"),
    ])
    db_session.flush()
    db_session.add_all([
        Restaurant(
            id=10, organization_id=1, name="R10", timezone="UTC",
            meta={"gst_rate": "8", "service_charge_rate": "10"},
        ),
        Restaurant(id=11, organization_id=1, name="R11", timezone="UTC", meta={}),
        Restaurant(id=20, organization_id=2, name="R20", timezone="UTC", meta={}),
    ])
    db_session.commit()
    return {"org1": 1, "org2": 2, "r10": 10, "r11": 11, "r20": 20}


@pytest.fixture
def seed_menu(db_session, seed_tenants):
    """Categories and menu items for restaurant 10 (and one for 11)."""
    db_session.add_all([
        Category(id=100, restaurant_id=10, name="Mains"),
        Category(id=101, restaurant_id=10, name="Drinks"),
        Category(id=110, restaurant_id=11, name="Mains"),
    ])
    items = {
        "burger": MenuItem(id=200, restaurant_id=10, category_id=100, name="Burger", price=Decimal("10.00")),
        "laksa": MenuItem(id=201, restaurant_id=10, category_id=100, name="Laksa", price=Decimal("20.00")),
        "tea": MenuItem(id=202, restaurant_id=10, category_id=101, name="Iced Tea", price=Decimal("5.50")),
        # Category removed from the menu: reports must call it Uncategorized
        "special": MenuItem(id=203, restaurant_id=10, category_id=999, name="Chef Special", price=Decimal("7.00")),
        "noodles": MenuItem(id=210, restaurant_id=11, category_id=110, name="Noodles", price=Decimal("9.00")),
    }
    db_session.add_all(items.values())
    db_session.commit()
    return items


@pytest.fixture
def seed_staff(db_session, seed_tenants):
    """Active operational staff: two at restaurant 10, one at 11."""
    db_session.add_all([
        Staff(id=300, organization_id=1, restaurant_id=10, full_name="A", role=Role.SERVER.value),
        Staff(id=301, organization_id=1, restaurant_id=10, full_name="B", role=Role.KITCHEN.value),
        Staff(id=302, organization_id=1, restaurant_id=10, full_name="C", role=Role.CASHIER.value, is_active=False),
        Staff(id=303, organization_id=1, restaurant_id=11, full_name="D", role=Role.MANAGER.value),
        Staff(id=304, organization_id=1, restaurant_id=None, full_name="E", role=Role.ORG_ADMIN.value),
    ])
    db_session.commit()
