"""
Tests for the sales analytics and restaurant selector endpoints.
"""

from shared.config.constants import Role
from tests.conftest import bearer, make_order


class TestAnalyticsEndpoint:

    def test_defaults_to_seven_days(self, client, db_session, seed_menu):
        make_order(db_session, 10, [(seed_menu["burger"], 2, "10.00")])
        db_session.commit()

        response = client.get(
            "/api/analytics",
            params={"restaurantId": 10},
            headers=bearer(Role.MANAGER, restaurant_id=10),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["timeRange"] == "7d"
        assert data["totalRevenue"] == 20.00
        assert data["avgOrderValue"] == 20.00
        assert data["scope"] == {"outcome": "explicit", "restaurantIds": [10]}
        assert data["popularItems"][0] == {"name": "Burger", "orders": 2, "revenue": 20.00, "percentage": 200.0}
        assert len(data["hourlyData"]) == 14
        assert data["staffPerformance"] == []

    def test_staff_performance_is_camel_cased(self, client, db_session, seed_menu, seed_staff):
        make_order(db_session, 10, [(seed_menu["burger"], 2, "10.00")], server_id=300)
        db_session.commit()

        response = client.get(
            "/api/analytics",
            params={"restaurantId": 10},
            headers=bearer(Role.MANAGER, restaurant_id=10),
        )

        assert response.status_code == 200
        assert response.json()["staffPerformance"] == [
            {"id": 300, "name": "A", "orders": 1, "revenue": 20.00},
            {"id": 301, "name": "B", "orders": 0, "revenue": 0.0},
        ]

    def test_unsupported_time_range(self, client, seed_tenants):
        response = client.get(
            "/api/analytics",
            params={"timeRange": "365d"},
            headers=bearer(Role.MANAGER, restaurant_id=10),
        )
        assert response.status_code == 400
        assert response.json()["reason"] == "invalid_time_range"

    def test_org_admin_without_selection_gets_empty_summary(self, client, seed_tenants):
        response = client.get(
            "/api/analytics",
            params={"timeRange": "30d"},
            headers=bearer(Role.ORG_ADMIN, organization_id=1),
        )
        data = response.json()
        assert data["timeRange"] == "30d"
        assert data["totalOrders"] == 0
        assert data["scope"]["outcome"] == "none-selected"

    def test_denied_without_restaurant(self, client, seed_tenants):
        response = client.get("/api/analytics", headers=bearer(Role.SERVER))
        assert response.status_code == 403
        assert response.json()["reason"] == "no_restaurant_access"


class TestRestaurantsEndpoint:

    def test_super_admin_lists_all(self, client, seed_tenants):
        response = client.get("/api/restaurants", headers=bearer(Role.SUPER_ADMIN))
        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [10, 11, 20]

    def test_org_admin_lists_own_organization(self, client, seed_tenants):
        response = client.get("/api/restaurants", headers=bearer(Role.ORG_ADMIN, organization_id=1))
        restaurants = response.json()
        assert [r["id"] for r in restaurants] == [10, 11]
        assert restaurants[0] == {
            "id": 10,
            "organization_id": 1,
            "name": "R10",
            "timezone": "UTC",
            "is_active": True,
        }

    def test_scoped_role_lists_own_restaurant(self, client, seed_tenants):
        response = client.get("/api/restaurants", headers=bearer(Role.CASHIER, restaurant_id=20))
        assert [r["id"] for r in response.json()] == [20]

    def test_requires_authentication(self, client):
        assert client.get("/api/restaurants").status_code == 401
