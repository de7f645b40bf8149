"""
API client modules for CoinMarketCap.

Data source strategy:
- JSON API: ticker list and single tickers
- Website (scraped): historical daily prices and exchange markets
"""

from .coinmarketcap import (
    Client,
    CoinMarketCapClient,
    Market,
    Price,
    PricesOptions,
    Ticker,
    TickersOptions,
)
from .exceptions import (
    APIError,
    CoinMarketCapError,
    DecodeError,
    ExtractionError,
    ResponseShapeError,
    TransportError,
)

__all__ = [
    # Client
    "Client",
    "CoinMarketCapClient",
    # Records
    "Ticker",
    "Price",
    "Market",
    "TickersOptions",
    "PricesOptions",
    # Errors
    "CoinMarketCapError",
    "TransportError",
    "APIError",
    "DecodeError",
    "ExtractionError",
    "ResponseShapeError",
]
