"""
Seed data for development and demos.
Creates one organization with two restaurants, staff, a small menu and a
day and a half of orders so the dashboard and reports have something to show.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import (
    Category,
    MenuItem,
    Order,
    OrderItem,
    Organization,
    Restaurant,
    Staff,
)
from shared.config.constants import OrderStatus, PaymentMethod, PaymentStatus, Role
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit

logger = get_logger(__name__)


DEMO_ORGANIZATION_ID = 1
DOWNTOWN_ID = 1
HARBOUR_ID = 2

# (id, organization_id, restaurant_id, full_name, email, role)
DEMO_STAFF = [
    (1, None, None, "Platform Admin", "admin@zex.test", Role.SUPER_ADMIN),
    (2, DEMO_ORGANIZATION_ID, None, "Olivia Owner", "owner@zex.test", Role.ORG_ADMIN),
    (3, DEMO_ORGANIZATION_ID, DOWNTOWN_ID, "Max Manager", "manager@zex.test", Role.MANAGER),
    (4, DEMO_ORGANIZATION_ID, DOWNTOWN_ID, "Sam Server", "server@zex.test", Role.SERVER),
    (5, DEMO_ORGANIZATION_ID, DOWNTOWN_ID, "Kim Kitchen", "kitchen@zex.test", Role.KITCHEN),
    (6, DEMO_ORGANIZATION_ID, HARBOUR_ID, "Cas Cashier", "cashier@zex.test", Role.CASHIER),
]

# restaurant_id -> staff ids taking table orders in rotation
DEMO_SERVERS = {DOWNTOWN_ID: [4, 3], HARBOUR_ID: [6]}

# restaurant_id -> [(category_id, name, [(menu_item_id, name, price)])]
DEMO_MENU = {
    DOWNTOWN_ID: [
        (1, "Mains", [(1, "Burger", "12.50"), (2, "Laksa", "14.00")]),
        (2, "Drinks", [(3, "Iced Tea", "3.50"), (4, "Kopi", "2.80")]),
    ],
    HARBOUR_ID: [
        (3, "Seafood", [(5, "Chilli Crab", "38.00"), (6, "Fish & Chips", "16.50")]),
        (4, "Desserts", [(7, "Chendol", "4.20")]),
    ],
}


def seed_tenants(db: Session) -> None:
    db.add(Organization(id=DEMO_ORGANIZATION_ID, name="Zex Hospitality"))
    db.add(
        Restaurant(
            id=DOWNTOWN_ID,
            organization_id=DEMO_ORGANIZATION_ID,
            name="Zex Downtown",
            timezone="Asia/Singapore",
            meta={"gst_rate": "9", "service_charge_rate": "10"},
        )
    )
    db.add(
        Restaurant(
            id=HARBOUR_ID,
            organization_id=DEMO_ORGANIZATION_ID,
            name="Zex Harbour",
            timezone="Asia/Singapore",
            meta={
                "gst_rate": "9",
                "service_charge_rate": "10",
                "gst_includes_service_charge": False,
            },
        )
    )
    for staff_id, org_id, restaurant_id, name, email, role in DEMO_STAFF:
        db.add(
            Staff(
                id=staff_id,
                organization_id=org_id,
                restaurant_id=restaurant_id,
                full_name=name,
                email=email,
                role=role.value,
            )
        )


def seed_menu(db: Session) -> dict[int, list[MenuItem]]:
    items_by_restaurant: dict[int, list[MenuItem]] = {}
    for restaurant_id, categories in DEMO_MENU.items():
        for category_id, category_name, items in categories:
            db.add(Category(id=category_id, restaurant_id=restaurant_id, name=category_name))
            for item_id, item_name, price in items:
                item = MenuItem(
                    id=item_id,
                    restaurant_id=restaurant_id,
                    category_id=category_id,
                    name=item_name,
                    price=Decimal(price),
                )
                db.add(item)
                items_by_restaurant.setdefault(restaurant_id, []).append(item)
    return items_by_restaurant


def seed_orders(db: Session, items_by_restaurant: dict[int, list[MenuItem]], now: datetime) -> int:
    """
    Create orders spread over yesterday and today.

    Every third order is still open; the rest are completed and paid with a
    rotating payment method. Table orders are credited to the restaurant's
    servers in turn.
    """
    methods = [PaymentMethod.CASH, PaymentMethod.CARD, PaymentMethod.DIGITAL, None]
    open_statuses = [OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY]
    order_id = 1000
    line_id = 1

    for restaurant_id, menu in items_by_restaurant.items():
        servers = DEMO_SERVERS.get(restaurant_id, [])
        for n in range(12):
            created_at = now - timedelta(hours=30) + timedelta(hours=n * 2.5)
            if created_at > now:
                break
            is_open = n % 3 == 2
            picks = [menu[n % len(menu)], menu[(n + 1) % len(menu)]]
            table_number = (n % 8) + 1 if n % 4 else None

            order = Order(
                id=order_id,
                restaurant_id=restaurant_id,
                table_number=table_number,
                server_id=servers[n % len(servers)] if table_number and servers else None,
                status=open_statuses[n % 3] if is_open else OrderStatus.COMPLETED,
                payment_status=PaymentStatus.UNPAID if is_open else PaymentStatus.PAID,
                payment_method=None if is_open else methods[n % len(methods)],
                created_at=created_at,
                completed_at=None if is_open else created_at + timedelta(minutes=18 + n),
            )
            total = Decimal("0")
            for quantity, item in enumerate(picks, start=1):
                line_total = item.price * quantity
                order.items.append(
                    OrderItem(
                        id=line_id,
                        menu_item_id=item.id,
                        quantity=quantity,
                        unit_price=item.price,
                        total_price=line_total,
                    )
                )
                total += line_total
                line_id += 1
            order.total_amount = total
            db.add(order)
            order_id += 1

    return order_id - 1000


def seed(db: Session, now: datetime | None = None) -> bool:
    """
    Seed demo data.
    Idempotent: does nothing if an organization already exists.

    Returns:
        True if data was inserted.
    """
    if db.scalar(select(Organization.id).limit(1)) is not None:
        logger.info("Demo data already present, skipping")
        return False

    now = now or datetime.now(timezone.utc)
    seed_tenants(db)
    items_by_restaurant = seed_menu(db)
    db.flush()
    order_count = seed_orders(db, items_by_restaurant, now)
    safe_commit(db)

    logger.info(
        "Demo data seeded",
        organizations=1,
        restaurants=len(items_by_restaurant),
        staff=len(DEMO_STAFF),
        orders=order_count,
    )
    return True
