"""Integration tests for the dashboard endpoint."""

from decimal import Decimal

from fastapi.testclient import TestClient

from tests.fixtures import create_asset


class TestDashboardAPI:
    def test_empty_dashboard(self, client: TestClient):
        response = client.get("/api/dashboard")
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["portfolio_total"]) == Decimal("0")
        assert data["tabs"] == []
        assert data["crypto"]["crypto_count"] == 0
        assert data["crypto"]["top_custody"] is None

    def test_dashboard_totals(self, client: TestClient, db, category, crypto_asset):
        """Portfolio total is assets plus crypto BRL; tabs report their share."""
        create_asset(db, "CDB", Decimal("50000"), category=category, return_percentage=Decimal("10"))
        create_asset(db, "LCI", Decimal("25000"), category=category, return_percentage=Decimal("4"))
        create_asset(db, "Misc", Decimal("0"))

        data = client.get("/api/dashboard").json()

        assert Decimal(data["portfolio_total"]) == Decimal("200000")
        tabs = {t["category_name"]: t for t in data["tabs"]}
        renda_fixa = tabs["Renda Fixa"]
        assert Decimal(renda_fixa["total"]) == Decimal("75000")
        assert renda_fixa["asset_count"] == 2
        assert Decimal(renda_fixa["average_return"]) == Decimal("8")
        assert Decimal(renda_fixa["percent_of_portfolio"]) == Decimal("37.5")
        assert renda_fixa["largest_position_name"] == "CDB"

        uncategorized = tabs["Sem Categoria"]
        assert uncategorized["largest_position_name"] is None

        crypto = data["crypto"]
        assert Decimal(crypto["total_brl"]) == Decimal("125000")
        assert Decimal(crypto["portfolio_percentage"]) == Decimal("62.5")
        assert crypto["top_custody"] == "Ledger"
        assert crypto["sector_allocation"][0]["sector_name"] == "Store of Value"

    def test_crypto_valued_at_current_rate(self, client: TestClient, quote_provider, crypto_asset):
        """Crypto BRL figures follow today's rate, not the one stored at the last edit."""
        quote_provider.rate = Decimal("6")

        data = client.get("/api/dashboard").json()

        assert Decimal(data["conversion_rate"]) == Decimal("6")
        assert Decimal(data["crypto"]["total_brl"]) == Decimal("150000")
        assert Decimal(data["portfolio_total"]) == Decimal("150000")
        assert Decimal(data["crypto"]["portfolio_percentage"]) == Decimal("100")
