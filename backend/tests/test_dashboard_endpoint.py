"""
Tests for the dashboard metrics endpoint.
"""

import re
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from rest_api.repositories import OrderRepository
from shared.config.constants import Role
from tests.conftest import bearer, make_order


URL = "/api/dashboard/metrics"


class TestDashboardScoping:
    """Scope resolution at the HTTP boundary."""

    def test_requires_authentication(self, client):
        response = client.get(URL)
        assert response.status_code == 401
        assert response.json() == {"detail": "Missing Authorization header", "reason": "authentication_required"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_rejects_invalid_token(self, client):
        response = client.get(URL, headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["reason"] == "invalid_token"

    def test_org_admin_without_selection_gets_zeroed_metrics(
        self, client, db_session, seed_menu, statement_counter
    ):
        make_order(db_session, 10, [(seed_menu["burger"], 2, "10.00")])
        db_session.commit()
        statement_counter.clear()

        response = client.get(URL, headers=bearer(Role.ORG_ADMIN, organization_id=1))

        assert response.status_code == 200
        data = response.json()
        assert data["scope"] == {"outcome": "none-selected", "restaurantIds": []}
        assert data["todaysRevenue"] == 0
        assert data["activeOrders"] == 0
        assert data["recentOrders"] == []
        assert data["hourlyData"] == []
        assert not [s for s in statement_counter if re.search(r"\borders\b", s)]

    def test_scoped_role_falls_back_to_own_restaurant(self, client, db_session, seed_menu):
        make_order(db_session, 10, [(seed_menu["burger"], 2, "10.00")])
        make_order(db_session, 11, [(seed_menu["noodles"], 1, "9.00")])
        db_session.commit()

        response = client.get(
            URL,
            params={"restaurantId": 11},
            headers=bearer(Role.SERVER, restaurant_id=10),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["scope"] == {"outcome": "fallback-single", "restaurantIds": [10]}
        assert data["todaysRevenue"] == 20.00

    def test_org_admin_foreign_restaurant_falls_back_to_organization(self, client, db_session, seed_menu):
        make_order(db_session, 10, [(seed_menu["burger"], 2, "10.00")])
        make_order(db_session, 11, [(seed_menu["noodles"], 1, "9.00")])
        db_session.commit()

        response = client.get(
            URL,
            params={"restaurantId": 20},
            headers=bearer(Role.ORG_ADMIN, organization_id=1),
        )

        data = response.json()
        assert data["scope"]["outcome"] == "fallback-organization-wide"
        assert sorted(data["scope"]["restaurantIds"]) == [10, 11]
        assert data["todaysRevenue"] == 29.00

    def test_super_admin_explicit_selection(self, client, seed_tenants):
        response = client.get(URL, params={"restaurantId": 20}, headers=bearer(Role.SUPER_ADMIN))
        assert response.status_code == 200
        assert response.json()["scope"] == {"outcome": "explicit", "restaurantIds": [20]}

    def test_scoped_role_without_restaurant_is_forbidden(self, client, seed_tenants):
        response = client.get(URL, params={"restaurantId": 10}, headers=bearer(Role.KITCHEN, organization_id=1))
        assert response.status_code == 403
        assert response.json() == {"detail": "Not authorized to access any restaurant", "reason": "no_restaurant_access"}

    def test_malformed_restaurant_id_is_bad_request(self, client, seed_tenants):
        response = client.get(URL, params={"restaurantId": "ten"}, headers=bearer(Role.SUPER_ADMIN))
        assert response.status_code == 400
        assert response.json()["reason"] == "invalid_input"


class TestDashboardPayload:
    """camelCase response body."""

    def test_camel_case_keys(self, client, db_session, seed_menu, seed_staff):
        make_order(db_session, 10, [(seed_menu["burger"], 1, "10.00")], table_number=7)
        db_session.commit()

        response = client.get(URL, params={"restaurantId": 10}, headers=bearer(Role.MANAGER, restaurant_id=10))

        data = response.json()
        assert set(data) == {
            "todaysRevenue", "revenueChange", "activeOrders", "pendingOrders",
            "preparingOrders", "staffCount", "avgOrderTime", "recentOrders",
            "hourlyData", "scope",
        }
        assert data["staffCount"] == 2
        recent = data["recentOrders"][0]
        assert set(recent) == {"id", "orderNumber", "table", "items", "total", "status", "itemCount"}
        assert recent["table"] == "Table 7"
        assert data["hourlyData"][-1] == {"hour": "14:00", "revenue": 0}

    def test_revenue_failure_is_a_server_error(self, client, seed_tenants):
        error = OperationalError("SELECT", {}, Exception("down"))
        with patch.object(OrderRepository, "find_paid_in", side_effect=error):
            response = client.get(URL, params={"restaurantId": 10}, headers=bearer(Role.MANAGER, restaurant_id=10))

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error", "reason": "upstream_lookup_failed"}
