"""Tests for CryptoService."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from integrations.exceptions import ProviderAPIError
from models import CryptoAsset
from schemas import CryptoCreate, CryptoUpdate
from services.crypto_service import CryptoService, recompute_crypto_totals
from tests.fixtures.mocks import OTHER_USER_ID, TEST_USER_ID, FakeQuoteProvider


class TestRecomputeCryptoTotals:
    def test_totals(self):
        crypto = CryptoAsset(price_usd=Decimal("2000"), quantity=Decimal("1.5"))
        recompute_crypto_totals(crypto, Decimal("5"))
        assert crypto.total_usd == Decimal("3000")
        assert crypto.total_brl == Decimal("15000")


class TestResolveConversionRate:
    def test_uses_provider_rate(self):
        service = CryptoService(provider=FakeQuoteProvider(rate=Decimal("5.43")))
        assert service.resolve_conversion_rate() == Decimal("5.43")

    def test_falls_back_on_provider_error(self, monkeypatch):
        """Provider failures fall back to the configured rate."""
        monkeypatch.setattr("services.crypto_service.settings.DEFAULT_USD_BRL_RATE", Decimal("5.05"))
        service = CryptoService(provider=FakeQuoteProvider(should_fail=True))
        assert service.resolve_conversion_rate() == Decimal("5.05")

    def test_falls_back_on_api_error(self, monkeypatch):
        monkeypatch.setattr("services.crypto_service.settings.DEFAULT_USD_BRL_RATE", Decimal("5.05"))
        provider = MagicMock()
        provider.get_usd_rate.side_effect = ProviderAPIError("boom", "coingecko", status_code=500)
        service = CryptoService(provider=provider)
        assert service.resolve_conversion_rate() == Decimal("5.05")


class TestCreateCrypto:
    def test_create_uppercases_ticker_and_computes_totals(self, db, sector, custody):
        service = CryptoService(provider=FakeQuoteProvider())
        crypto = service.create_crypto(
            db,
            TEST_USER_ID,
            CryptoCreate(
                ticker="eth",
                name="Ethereum",
                sector_id=sector.id,
                custody_id=custody.id,
                price_usd=Decimal("3000"),
                quantity=Decimal("2"),
            ),
            Decimal("5"),
        )
        assert crypto.ticker == "ETH"
        assert crypto.total_usd == Decimal("6000.00")
        assert crypto.total_brl == Decimal("30000.00")
        assert crypto.sector_name == "Store of Value"
        assert crypto.custody_name == "Ledger"

    def test_missing_labels_use_placeholders(self, db):
        service = CryptoService(provider=FakeQuoteProvider())
        crypto = service.create_crypto(
            db, TEST_USER_ID, CryptoCreate(ticker="SOL", name="Solana"), Decimal("5")
        )
        assert crypto.sector_name == "Outros"
        assert crypto.custody_name == "Unknown"

    def test_unknown_sector(self, db):
        service = CryptoService(provider=FakeQuoteProvider())
        with pytest.raises(HTTPException) as exc_info:
            service.create_crypto(
                db, TEST_USER_ID, CryptoCreate(ticker="SOL", name="Solana", sector_id="nope"), Decimal("5")
            )
        assert exc_info.value.status_code == 404


class TestUpdateCrypto:
    def test_quantity_change_recomputes_with_rate(self, db, crypto_asset):
        service = CryptoService(provider=FakeQuoteProvider())
        updated = service.update_crypto(
            db, TEST_USER_ID, crypto_asset.id, CryptoUpdate(quantity=Decimal("1")), Decimal("6")
        )
        assert updated.total_usd == Decimal("50000.00")
        assert updated.total_brl == Decimal("300000.00")

    def test_other_user_not_found(self, db, crypto_asset):
        service = CryptoService(provider=FakeQuoteProvider())
        with pytest.raises(HTTPException) as exc_info:
            service.update_crypto(db, OTHER_USER_ID, crypto_asset.id, CryptoUpdate(quantity=Decimal("1")), Decimal("5"))
        assert exc_info.value.status_code == 404


class TestRefreshPrices:
    def test_updates_quoted_and_keeps_missing(self, db, crypto_asset):
        """Tickers with a quote are updated; the rest keep their values."""
        unknown = CryptoAsset(
            user_id=TEST_USER_ID,
            ticker="XYZ",
            name="Unknown coin",
            price_usd=Decimal("2"),
            quantity=Decimal("10"),
            total_brl=Decimal("100"),
        )
        db.add(unknown)
        db.commit()

        provider = FakeQuoteProvider(rate=Decimal("5"))
        result = CryptoService(provider=provider).refresh_prices(db, TEST_USER_ID)

        assert result.updated == ["BTC"]
        assert result.missing == ["XYZ"]
        assert result.conversion_rate == Decimal("5")
        assert provider.requested == [["BTC", "XYZ"]]

        db.refresh(crypto_asset)
        assert crypto_asset.price_usd == Decimal("60000")
        assert crypto_asset.total_usd == Decimal("30000.00")
        assert crypto_asset.total_brl == Decimal("150000.00")
        assert crypto_asset.change_percentage == Decimal("2.5")

        db.refresh(unknown)
        assert unknown.total_brl == Decimal("100.00")

    def test_provider_failure_keeps_everything(self, db, crypto_asset, monkeypatch):
        monkeypatch.setattr("services.crypto_service.settings.DEFAULT_USD_BRL_RATE", Decimal("5.05"))
        result = CryptoService(provider=FakeQuoteProvider(should_fail=True)).refresh_prices(db, TEST_USER_ID)

        assert result.updated == []
        assert result.missing == ["BTC"]
        assert result.conversion_rate == Decimal("5.05")
        db.refresh(crypto_asset)
        assert crypto_asset.total_brl == Decimal("125000.00")

    def test_no_holdings(self, db):
        provider = FakeQuoteProvider()
        result = CryptoService(provider=provider).refresh_prices(db, TEST_USER_ID)
        assert result.updated == []
        assert provider.requested == []


class TestStoredTotals:
    def test_totals_match_factors_after_reload(self, db):
        """Totals survive a reload without rounding away from price * quantity * rate."""
        service = CryptoService(provider=FakeQuoteProvider())
        crypto = service.create_crypto(
            db,
            TEST_USER_ID,
            CryptoCreate(ticker="ETH", name="Ethereum", price_usd=Decimal("3012.123"), quantity=Decimal("0.3333")),
            Decimal("5.4321"),
        )
        db.expire_all()
        crypto = CryptoService.get_crypto(db, TEST_USER_ID, crypto.id)

        assert crypto.total_usd == crypto.price_usd * crypto.quantity
        assert crypto.total_usd == Decimal("3012.123") * Decimal("0.3333")
        assert crypto.total_brl == crypto.total_usd * Decimal("5.4321")

    def test_list_ordered_by_usd_total(self, db, crypto_asset):
        db.add(CryptoAsset(user_id=TEST_USER_ID, ticker="ETH", name="Ethereum",
                           price_usd=Decimal("3000"), quantity=Decimal("10")))
        db.commit()
        tickers = [c.ticker for c in CryptoService.list_cryptos(db, TEST_USER_ID)]
        assert tickers == ["ETH", "BTC"]
