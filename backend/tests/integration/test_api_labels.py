"""Integration tests for label vocabulary endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient

from services.label_service import seed_default_labels
from tests.fixtures import create_asset


class TestLabelsAPI:
    def test_list_includes_defaults(self, client: TestClient, db):
        seed_default_labels(db)
        response = client.get("/api/sectors")
        assert response.status_code == 200
        names = {s["name"] for s in response.json()}
        assert {"Stablecoins", "DeFi", "Outros"} <= names

    def test_create_and_duplicate(self, client: TestClient):
        response = client.post("/api/custodies", json={"name": "Kraken"})
        assert response.status_code == 201
        assert response.json()["is_default"] is False

        response = client.post("/api/custodies", json={"name": "KRAKEN"})
        assert response.status_code == 400

    def test_rename(self, client: TestClient, category):
        response = client.patch(f"/api/categories/{category.id}", json={"name": "Tesouro Direto"})
        assert response.status_code == 200
        assert response.json()["name"] == "Tesouro Direto"

    def test_delete_referenced_is_conflict(self, client: TestClient, db, category):
        """A category used by an asset cannot be deleted."""
        create_asset(db, "CDB", Decimal("100"), category=category)
        response = client.delete(f"/api/categories/{category.id}")
        assert response.status_code == 409

    def test_delete_unreferenced(self, client: TestClient, category):
        response = client.delete(f"/api/categories/{category.id}")
        assert response.status_code == 204
        assert client.get("/api/categories").json() == []
