"""Service for crypto holdings, quotes and the USD/BRL conversion rate."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from config import settings
from integrations.coingecko_client import CoinGeckoClient
from integrations.exceptions import ProviderError
from models import CryptoAsset
from schemas import CryptoCreate, CryptoUpdate
from services.label_service import custody_labels, sector_labels

logger = logging.getLogger(__name__)


@dataclass
class PriceRefreshResult:
    """Tickers whose quotes were applied, and tickers left untouched."""

    conversion_rate: Decimal
    updated: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def recompute_crypto_totals(crypto: CryptoAsset, conversion_rate: Decimal) -> None:
    """Set ``total_brl`` to the USD total (price times quantity) at ``conversion_rate``."""
    crypto.total_brl = crypto.total_usd * conversion_rate


class CryptoService:
    """CRUD and price refresh for crypto holdings.

    The quote provider is created lazily so tests can inject a fake one.
    """

    def __init__(self, provider: Optional[CoinGeckoClient] = None):
        self._provider = provider

    @property
    def provider(self) -> CoinGeckoClient:
        """Get the quote provider, creating a CoinGeckoClient if not provided."""
        if self._provider is None:
            self._provider = CoinGeckoClient(api_key=settings.COINGECKO_API_KEY or None)
        return self._provider

    def resolve_conversion_rate(self) -> Decimal:
        """USD to BRL rate from the provider, or the configured fallback."""
        try:
            rate = self.provider.get_usd_rate("brl")
        except ProviderError:
            logger.warning(
                "USD/BRL rate unavailable, using fallback %s",
                settings.DEFAULT_USD_BRL_RATE,
                exc_info=True,
            )
            return settings.DEFAULT_USD_BRL_RATE
        if rate <= 0:
            logger.warning("Provider returned non-positive USD/BRL rate %s, using fallback", rate)
            return settings.DEFAULT_USD_BRL_RATE
        return rate

    @staticmethod
    def list_cryptos(db: Session, user_id: str) -> list[CryptoAsset]:
        """List the user's crypto holdings, largest USD position first."""
        return (
            db.query(CryptoAsset)
            .options(joinedload(CryptoAsset.sector), joinedload(CryptoAsset.custody))
            .filter(CryptoAsset.user_id == user_id)
            .order_by((CryptoAsset.price_usd * CryptoAsset.quantity).desc(), CryptoAsset.ticker)
            .all()
        )

    @staticmethod
    def get_crypto(db: Session, user_id: str, crypto_id: str) -> CryptoAsset:
        crypto = (
            db.query(CryptoAsset)
            .filter(CryptoAsset.id == crypto_id, CryptoAsset.user_id == user_id)
            .first()
        )
        if not crypto:
            raise HTTPException(status_code=404, detail="Crypto asset not found")
        return crypto

    @staticmethod
    def _check_labels(db: Session, user_id: str, sector_id: Optional[str], custody_id: Optional[str]) -> None:
        if sector_id is not None:
            sector_labels.get_visible(db, user_id, sector_id)
        if custody_id is not None:
            custody_labels.get_visible(db, user_id, custody_id)

    def create_crypto(
        self, db: Session, user_id: str, data: CryptoCreate, conversion_rate: Decimal
    ) -> CryptoAsset:
        """Create a crypto holding valued at ``conversion_rate``.

        Raises:
            HTTPException: 404 if the sector or custody is not visible to the user
        """
        self._check_labels(db, user_id, data.sector_id, data.custody_id)

        crypto = CryptoAsset(
            user_id=user_id,
            ticker=data.ticker.strip().upper(),
            name=data.name.strip(),
            sector_id=data.sector_id,
            custody_id=data.custody_id,
            price_usd=data.price_usd,
            quantity=data.quantity,
            change_percentage=data.change_percentage,
        )
        recompute_crypto_totals(crypto, conversion_rate)
        db.add(crypto)
        db.commit()
        db.refresh(crypto)
        logger.info("Crypto asset created: %s (id=%s)", crypto.ticker, crypto.id)
        return crypto

    def update_crypto(
        self,
        db: Session,
        user_id: str,
        crypto_id: str,
        data: CryptoUpdate,
        conversion_rate: Decimal,
    ) -> CryptoAsset:
        """Apply the fields that were set and recompute the BRL total at ``conversion_rate``."""
        crypto = self.get_crypto(db, user_id, crypto_id)
        changes = data.model_dump(exclude_unset=True)
        self._check_labels(db, user_id, changes.get("sector_id"), changes.get("custody_id"))

        for field_name, value in changes.items():
            if field_name in ("price_usd", "quantity", "change_percentage", "ticker", "name") and value is None:
                continue
            if field_name == "ticker":
                value = value.strip().upper()
            setattr(crypto, field_name, value)

        recompute_crypto_totals(crypto, conversion_rate)
        db.commit()
        db.refresh(crypto)
        logger.info("Crypto asset updated: %s (id=%s)", crypto.ticker, crypto.id)
        return crypto

    @staticmethod
    def delete_crypto(db: Session, user_id: str, crypto_id: str) -> None:
        crypto = CryptoService.get_crypto(db, user_id, crypto_id)
        db.delete(crypto)
        db.commit()
        logger.info("Crypto asset deleted: %s (id=%s)", crypto.ticker, crypto_id)

    def refresh_prices(self, db: Session, user_id: str) -> PriceRefreshResult:
        """Fetch current quotes for every held ticker and update totals.

        Tickers without a quote, or every ticker when the provider fails,
        keep their previous values.
        """
        cryptos = self.list_cryptos(db, user_id)
        rate = self.resolve_conversion_rate()
        result = PriceRefreshResult(conversion_rate=rate)
        if not cryptos:
            return result

        tickers = sorted({c.ticker.upper() for c in cryptos})
        try:
            quotes = self.provider.get_quotes(tickers)
        except ProviderError:
            logger.warning("Crypto quote refresh failed for user %s", user_id, exc_info=True)
            quotes = {}

        for crypto in cryptos:
            quote = quotes.get(crypto.ticker.upper())
            if quote is None:
                result.missing.append(crypto.ticker)
                continue
            crypto.price_usd = quote.price_usd
            crypto.change_percentage = quote.change_24h
            recompute_crypto_totals(crypto, rate)
            result.updated.append(crypto.ticker)

        db.commit()
        logger.info(
            "Crypto prices refreshed: %d updated, %d missing",
            len(result.updated), len(result.missing),
        )
        return result
