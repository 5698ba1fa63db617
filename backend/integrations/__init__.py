"""External market data integrations."""

from integrations.coingecko_client import CoinGeckoClient, CryptoQuote
from integrations.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderDataError,
    ProviderError,
)

__all__ = [
    "CoinGeckoClient",
    "CryptoQuote",
    "ProviderAPIError",
    "ProviderConnectionError",
    "ProviderDataError",
    "ProviderError",
]
