"""CoinGecko market data provider for crypto quotes and the USD/BRL rate."""

import logging
import time as time_module
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from integrations.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderDataError,
)

logger = logging.getLogger(__name__)

PROVIDER_NAME = "coingecko"

# Hardcoded mapping for the most common crypto symbols.
# Covers the vast majority of real portfolios without an API call.
_KNOWN_COIN_IDS: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "USDT": "tether",
    "USDC": "usd-coin",
    "DAI": "dai",
    "BNB": "binancecoin",
    "DOGE": "dogecoin",
    "ADA": "cardano",
    "XRP": "ripple",
    "DOT": "polkadot",
    "AVAX": "avalanche-2",
    "MATIC": "matic-network",
    "POL": "matic-network",
    "LINK": "chainlink",
    "UNI": "uniswap",
    "ATOM": "cosmos",
    "LTC": "litecoin",
    "NEAR": "near",
    "ARB": "arbitrum",
    "OP": "optimism",
    "AAVE": "aave",
    "SHIB": "shiba-inu",
    "XLM": "stellar",
    "PEPE": "pepe",
    "RENDER": "render-token",
}

# Max retries for rate-limited requests
_MAX_RETRIES = 3
_BASE_DELAY_SECONDS = 1.0


@dataclass
class CryptoQuote:
    """Current price of one coin in USD and BRL."""

    symbol: str
    coin_id: str
    price_usd: Decimal
    price_brl: Decimal
    change_24h: Decimal


def _to_decimal(value) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ProviderDataError(f"Unparseable number: {value!r}", PROVIDER_NAME) from e


class CoinGeckoClient:
    """Market data provider using the CoinGecko API."""

    def __init__(self, api_key: Optional[str] = None):
        """Initialize with optional API key.

        Args:
            api_key: CoinGecko demo API key. If provided, uses the
                     x-cg-demo-api-key header for higher rate limits.
                     If None, uses the keyless public API.
        """
        headers: dict[str, str] = {}
        if api_key:
            headers["x-cg-demo-api-key"] = api_key
        self._client = httpx.Client(
            base_url="https://api.coingecko.com/api/v3",
            headers=headers,
            timeout=30.0,
        )
        self._resolved_ids: dict[str, str] = dict(_KNOWN_COIN_IDS)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    def _resolve_coin_id(self, symbol: str) -> Optional[str]:
        """Resolve a ticker symbol to a CoinGecko coin ID.

        Checks the cached mapping first, then falls back to the
        /search endpoint for unknown symbols.
        """
        upper = symbol.upper()
        if upper in self._resolved_ids:
            return self._resolved_ids[upper]

        try:
            response = self._request_with_retry("GET", "/search", params={"query": symbol})
            coins = response.json().get("coins", [])
        except (ProviderAPIError, ProviderConnectionError, ValueError):
            logger.warning("CoinGecko: failed to resolve symbol %s", symbol, exc_info=True)
            return None

        # Pick the exact symbol match with the best (lowest) market_cap_rank
        best = None
        for coin in coins:
            if coin.get("symbol", "").upper() != upper:
                continue
            rank = coin.get("market_cap_rank")
            if rank is not None and (best is None or rank < best.get("market_cap_rank", float("inf"))):
                best = coin

        # If no exact symbol match with rank, fall back to first exact match
        if best is None:
            for coin in coins:
                if coin.get("symbol", "").upper() == upper:
                    best = coin
                    break

        if best is None:
            logger.warning("CoinGecko: no matching coin for symbol %s", symbol)
            return None

        coin_id = best["id"]
        self._resolved_ids[upper] = coin_id
        logger.info("CoinGecko: resolved %s -> %s", symbol, coin_id)
        return coin_id

    def _request_with_retry(
        self, method: str, path: str, **kwargs
    ) -> httpx.Response:
        """Make an HTTP request with retry on 429 rate limit responses.

        Raises:
            ProviderConnectionError: On network failures.
            ProviderAPIError: On non-429 error statuses, or when retries
                are exhausted.
        """
        for attempt in range(_MAX_RETRIES):
            try:
                response = self._client.request(method, path, **kwargs)
            except httpx.TransportError as e:
                raise ProviderConnectionError(
                    f"CoinGecko request failed: {e}", PROVIDER_NAME
                ) from e

            if response.status_code == 429:
                delay = _BASE_DELAY_SECONDS * (2 ** attempt)
                logger.warning(
                    "CoinGecko: rate limited, retrying in %.1fs (attempt %d/%d)",
                    delay, attempt + 1, _MAX_RETRIES,
                )
                time_module.sleep(delay)
                continue

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise ProviderAPIError(
                    f"CoinGecko returned HTTP {response.status_code}",
                    PROVIDER_NAME,
                    status_code=response.status_code,
                ) from e
            return response

        raise ProviderAPIError(
            "CoinGecko: max retries exceeded", PROVIDER_NAME, status_code=429
        )

    def get_quotes(self, symbols: list[str]) -> dict[str, CryptoQuote]:
        """Fetch current USD and BRL prices for crypto tickers.

        Args:
            symbols: Ticker symbols (e.g., ["BTC", "ETH"]), any case.

        Returns:
            Dict mapping each upper-cased symbol with a quote to its
            CryptoQuote. Symbols that cannot be resolved are omitted.
        """
        if not symbols:
            return {}

        ids_by_symbol: dict[str, str] = {}
        for symbol in symbols:
            coin_id = self._resolve_coin_id(symbol)
            if coin_id is not None:
                ids_by_symbol[symbol.upper()] = coin_id

        if not ids_by_symbol:
            return {}

        logger.info("CoinGecko: fetching quotes for %d symbols", len(ids_by_symbol))
        response = self._request_with_retry(
            "GET",
            "/simple/price",
            params={
                "ids": ",".join(sorted(set(ids_by_symbol.values()))),
                "vs_currencies": "usd,brl",
                "include_24hr_change": "true",
            },
        )
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderDataError("CoinGecko returned invalid JSON", PROVIDER_NAME) from e

        result: dict[str, CryptoQuote] = {}
        for symbol, coin_id in ids_by_symbol.items():
            entry = data.get(coin_id)
            if not entry or entry.get("usd") is None or entry.get("brl") is None:
                logger.warning("CoinGecko: no quote for %s (%s)", symbol, coin_id)
                continue
            result[symbol] = CryptoQuote(
                symbol=symbol,
                coin_id=coin_id,
                price_usd=_to_decimal(entry["usd"]),
                price_brl=_to_decimal(entry["brl"]),
                change_24h=_to_decimal(entry.get("usd_24h_change") or 0),
            )
        return result

    def get_usd_rate(self, currency: str = "brl") -> Decimal:
        """Return how many units of ``currency`` one US dollar buys.

        Uses the BTC-denominated /exchange_rates table:
        ``rate = rates[currency] / rates["usd"]``.

        Raises:
            ProviderDataError: If either rate is missing or zero.
        """
        response = self._request_with_retry("GET", "/exchange_rates")
        try:
            rates = response.json().get("rates", {})
        except ValueError as e:
            raise ProviderDataError("CoinGecko returned invalid JSON", PROVIDER_NAME) from e

        usd = rates.get("usd", {}).get("value")
        target = rates.get(currency.lower(), {}).get("value")
        if not usd or not target:
            raise ProviderDataError(
                f"CoinGecko exchange rates missing usd/{currency}", PROVIDER_NAME
            )
        return _to_decimal(target) / _to_decimal(usd)
