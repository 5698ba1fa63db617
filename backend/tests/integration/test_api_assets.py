"""Integration tests for /api/assets endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient

from tests.fixtures import create_asset
from tests.fixtures.mocks import OTHER_USER_ID


class TestAssetsAPI:
    def test_requires_user_header(self, anonymous_client: TestClient):
        """Requests without X-User-Id are rejected."""
        response = anonymous_client.get("/api/assets")
        assert response.status_code == 401

    def test_create_and_get(self, client: TestClient, category):
        response = client.post(
            "/api/assets",
            json={
                "name": "Tesouro Selic",
                "ticker": "SELIC29",
                "category_id": category.id,
                "price": "14500.10",
                "quantity": "2",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert Decimal(data["total"]) == Decimal("29000.20")
        assert data["category_name"] == "Renda Fixa"

        response = client.get(f"/api/assets/{data['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Tesouro Selic"

    def test_create_requires_name(self, client: TestClient):
        response = client.post("/api/assets", json={"name": ""})
        assert response.status_code == 422

    def test_list_only_own_assets(self, client: TestClient, db):
        create_asset(db, "Mine", Decimal("10"))
        create_asset(db, "Theirs", Decimal("10"), user_id=OTHER_USER_ID)

        response = client.get("/api/assets")
        assert response.status_code == 200
        assert [a["name"] for a in response.json()] == ["Mine"]

    def test_filter_by_category(self, client: TestClient, db, category):
        create_asset(db, "CDB", Decimal("10"), category=category)
        create_asset(db, "Misc", Decimal("10"))

        response = client.get("/api/assets", params={"category_id": category.id})
        assert [a["name"] for a in response.json()] == ["CDB"]

    def test_patch_recomputes_total(self, client: TestClient, db):
        asset = create_asset(db, "PETR4", Decimal("30"), Decimal("100"))

        response = client.patch(f"/api/assets/{asset.id}", json={"price": "35", "total": "1"})
        assert response.status_code == 200
        assert Decimal(response.json()["total"]) == Decimal("3500")

    def test_other_users_asset_is_404(self, client: TestClient, db):
        asset = create_asset(db, "Theirs", Decimal("10"), user_id=OTHER_USER_ID)
        assert client.get(f"/api/assets/{asset.id}").status_code == 404
        assert client.delete(f"/api/assets/{asset.id}").status_code == 404

    def test_delete(self, client: TestClient, db):
        asset = create_asset(db, "CDB", Decimal("10"))
        response = client.delete(f"/api/assets/{asset.id}")
        assert response.status_code == 204
        assert client.get(f"/api/assets/{asset.id}").status_code == 404
