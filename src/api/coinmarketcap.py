"""
CoinMarketCap client for the CMC package.

Provides methods to:
- List tickers ranked by market cap (JSON API)
- Fetch a single ticker by coin ID (JSON API)
- Fetch daily historical prices (scraped from the website)
- Fetch per-exchange market volume (scraped from the website)

Scraped operations depend on the website's markup and break when it
changes; see api.scraping.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import requests

from config import (
    CMC_API_BASE_URL,
    CMC_WEBSITE_BASE_URL,
    MARKETS_ANCHOR,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from utils.logging import get_logger

from .exceptions import (
    APIError,
    DecodeError,
    ExtractionError,
    ResponseShapeError,
    TransportError,
)
from .scraping import extract_market_rows, extract_price_rows

logger = get_logger(__name__)


def _text(data: dict[str, Any], key: str) -> str:
    """Read a text field, keeping strings verbatim."""
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # Bodies are parsed with parse_float=Decimal, so JSON numbers keep their digits
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    raise DecodeError(f"Field '{key}' has unexpected type {type(value).__name__}")


def _rank(data: dict[str, Any]) -> int:
    value = data.get("rank")
    if isinstance(value, bool):
        raise DecodeError(f"Field 'rank' is not an integer: {value!r}")
    try:
        rank = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise DecodeError(f"Field 'rank' is not an integer: {value!r}") from e
    # int() truncates 1.9 to 1
    if isinstance(value, (float, Decimal)) and value != rank:
        raise DecodeError(f"Field 'rank' is not an integer: {value!r}")
    return rank


@dataclass(frozen=True)
class Ticker:
    """A coin's current market statistics as reported by the ticker API.

    Numeric values are kept as the provider's text to avoid float rounding.
    """

    id: str
    name: str
    symbol: str
    rank: int
    price_usd: str
    price_btc: str
    volume_usd_24h: str
    market_cap_usd: str
    available_supply: str
    total_supply: str
    percent_change_1h: str
    percent_change_24h: str
    percent_change_7d: str
    last_updated: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ticker":
        """
        Build a Ticker from an API ticker object.

        Raises:
            DecodeError: If the object is malformed
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a ticker object, got {type(data).__name__}")

        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            symbol=_text(data, "symbol"),
            rank=_rank(data),
            price_usd=_text(data, "price_usd"),
            price_btc=_text(data, "price_btc"),
            volume_usd_24h=_text(data, "24h_volume_usd"),
            market_cap_usd=_text(data, "market_cap_usd"),
            available_supply=_text(data, "available_supply"),
            total_supply=_text(data, "total_supply"),
            percent_change_1h=_text(data, "percent_change_1h"),
            percent_change_24h=_text(data, "percent_change_24h"),
            percent_change_7d=_text(data, "percent_change_7d"),
            last_updated=_text(data, "last_updated"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the API's wire format (rank as a numeric string)."""
        return {
            "id": self.id,
            "name": self.name,
            "symbol": self.symbol,
            "rank": str(self.rank),
            "price_usd": self.price_usd,
            "price_btc": self.price_btc,
            "24h_volume_usd": self.volume_usd_24h,
            "market_cap_usd": self.market_cap_usd,
            "available_supply": self.available_supply,
            "total_supply": self.total_supply,
            "percent_change_1h": self.percent_change_1h,
            "percent_change_24h": self.percent_change_24h,
            "percent_change_7d": self.percent_change_7d,
            "last_updated": self.last_updated,
        }


@dataclass(frozen=True)
class Price:
    """A single day's price data."""

    date: str
    open_usd: str
    high_usd: str
    low_usd: str
    close_usd: str
    volume_usd_24h: str
    market_cap_usd: str

    @classmethod
    def from_row(cls, cells: list[str]) -> "Price":
        """Build from an extracted ``[date, open, high, low, close, volume, market_cap]`` row."""
        date, open_usd, high_usd, low_usd, close_usd, volume, market_cap = cells
        return cls(
            date=date,
            open_usd=open_usd,
            high_usd=high_usd,
            low_usd=low_usd,
            close_usd=close_usd,
            volume_usd_24h=volume,
            market_cap_usd=market_cap,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Price":
        return cls(
            date=_text(data, "date"),
            open_usd=_text(data, "open_usd"),
            high_usd=_text(data, "high_usd"),
            low_usd=_text(data, "low_usd"),
            close_usd=_text(data, "close_usd"),
            volume_usd_24h=_text(data, "24h_volume_usd"),
            market_cap_usd=_text(data, "market_cap_usd"),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "date": self.date,
            "open_usd": self.open_usd,
            "high_usd": self.high_usd,
            "low_usd": self.low_usd,
            "close_usd": self.close_usd,
            "24h_volume_usd": self.volume_usd_24h,
            "market_cap_usd": self.market_cap_usd,
        }


@dataclass(frozen=True)
class Market:
    """Trading activity of a coin on one exchange pair."""

    source: str
    pair: str
    volume_usd_24h: str
    price_usd: str
    volume_percent: str

    @classmethod
    def from_row(cls, cells: list[str]) -> "Market":
        """Build from an extracted ``[source, pair, volume, price, percent]`` row."""
        source, pair, volume, price, percent = cells
        return cls(
            source=source,
            pair=pair,
            volume_usd_24h=volume,
            price_usd=price,
            volume_percent=percent,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Market":
        return cls(
            source=_text(data, "source"),
            pair=_text(data, "pair"),
            volume_usd_24h=_text(data, "24h_volume_usd"),
            price_usd=_text(data, "price_usd"),
            volume_percent=_text(data, "volume_percent"),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "source": self.source,
            "pair": self.pair,
            "24h_volume_usd": self.volume_usd_24h,
            "price_usd": self.price_usd,
            "volume_percent": self.volume_percent,
        }


@dataclass(frozen=True)
class TickersOptions:
    """
    Paging for list_tickers. Fields left as None are not sent.

    start: return results from rank [start] and above
    limit: return at most [limit] results (provider default is 100,
        0 returns everything)
    """

    start: int | None = None
    limit: int | None = None

    def to_params(self) -> dict[str, int]:
        params: dict[str, int] = {}
        if self.start is not None:
            params["start"] = self.start
        if self.limit is not None:
            params["limit"] = self.limit
        return params


@dataclass(frozen=True)
class PricesOptions:
    """Date range for get_prices, passed through as given (e.g. "20170101")."""

    start: str | None = None
    end: str | None = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.start is not None:
            params["start"] = self.start
        if self.end is not None:
            params["end"] = self.end
        return params


class Client(ABC):
    """Read-only interface to CoinMarketCap data."""

    @abstractmethod
    def list_tickers(self, options: TickersOptions | None = None) -> list[Ticker]:
        """Return tickers; without options the provider's top 100."""

    @abstractmethod
    def get_ticker(self, coin_id: str) -> Ticker:
        """Return the ticker of the coin with the given ID."""

    @abstractmethod
    def get_prices(
        self, coin_id: str, options: PricesOptions | None = None
    ) -> list[Price]:
        """Return daily historical prices of a coin."""

    @abstractmethod
    def get_markets(self, coin_id: str) -> list[Market]:
        """Return how much volume a coin trades on each exchange pair."""


class CoinMarketCapClient(Client):
    """
    CoinMarketCap client combining the JSON API and website scraping.

    The client holds no per-request state, so one instance may be shared
    across threads as long as the session is safe to share.

    Usage:
        with CoinMarketCapClient() as client:
            tickers = client.list_tickers(TickersOptions(limit=10))
            bitcoin = client.get_ticker("bitcoin")
            prices = client.get_prices("bitcoin", PricesOptions("20170101", "20170131"))
            markets = client.get_markets("bitcoin")
    """

    def __init__(
        self,
        api_url: str = CMC_API_BASE_URL,
        website_url: str = CMC_WEBSITE_BASE_URL,
        session: requests.Session | None = None,
        timeout: float | None = REQUEST_TIMEOUT,
    ):
        """
        Initialize the CoinMarketCap client.

        Args:
            api_url: JSON API base URL
            website_url: Base URL of the currency pages on the website
            session: HTTP session to send requests with (default: a new
                session owned and closed by this client)
            timeout: Seconds to wait for the server; None waits forever
        """
        self.api_url = api_url.rstrip("/")
        self.website_url = website_url.rstrip("/")
        self.timeout = timeout

        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers.update({
                "Accept": "application/json, text/html",
                "User-Agent": USER_AGENT,
            })
        self.session = session

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "CoinMarketCapClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        as_json: bool = True,
    ) -> Any:
        """
        Send one GET request and read the body.

        Args:
            url: Absolute URL
            params: Query parameters
            as_json: Decode the body as JSON instead of returning text

        Returns:
            Parsed JSON or the body text

        Raises:
            TransportError: When the request fails
            APIError: For non-200 responses
            DecodeError: When a JSON body does not parse
        """
        logger.debug("GET %s params=%s", url, params)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise TransportError(f"Request failed: {e}") from e

        try:
            if response.status_code != 200:
                logger.warning("GET %s returned %s", url, response.status_code)
                raise APIError(
                    response.status_code,
                    f"API error {response.status_code}: {response.text[:200]}",
                )

            if not as_json:
                return response.text

            try:
                return response.json(parse_float=Decimal)
            except ValueError as e:
                logger.warning("Invalid JSON from %s: %s", url, e)
                raise DecodeError(f"Invalid JSON response: {e}") from e
        finally:
            response.close()

    def _decode_tickers(self, data: Any) -> list[Ticker]:
        if not isinstance(data, list):
            raise DecodeError(f"Expected a list of tickers, got {type(data).__name__}")
        return [Ticker.from_dict(item) for item in data]

    def list_tickers(self, options: TickersOptions | None = None) -> list[Ticker]:
        """
        Fetch tickers ordered by rank.

        Args:
            options: Start rank and result limit (default: provider's top 100)

        Returns:
            List of Ticker objects
        """
        params = options.to_params() if options is not None else None
        data = self._request(f"{self.api_url}/ticker", params=params)
        return self._decode_tickers(data)

    def get_ticker(self, coin_id: str) -> Ticker:
        """
        Fetch the ticker for one coin.

        Args:
            coin_id: CoinMarketCap coin ID (e.g., "bitcoin", "ethereum")

        Returns:
            Ticker for the coin

        Raises:
            ResponseShapeError: If the API does not return exactly one ticker
        """
        if not coin_id:
            raise ValueError("coin_id must be a non-empty string")

        tickers = self._decode_tickers(
            self._request(f"{self.api_url}/ticker/{coin_id}")
        )
        if len(tickers) != 1:
            raise ResponseShapeError(
                f"Expected 1 ticker for '{coin_id}', got {len(tickers)}"
            )
        return tickers[0]

    def get_prices(
        self, coin_id: str, options: PricesOptions | None = None
    ) -> list[Price]:
        """
        Fetch daily historical prices by scraping the historical-data page.

        Args:
            coin_id: CoinMarketCap coin ID
            options: Date range (default: the page's default range)

        Returns:
            List of Price objects in page order (newest first on the site)

        Raises:
            ExtractionError: If the page has no readable price table
        """
        if not coin_id:
            raise ValueError("coin_id must be a non-empty string")

        params = options.to_params() if options is not None else None
        html = self._request(
            f"{self.website_url}/{coin_id}/historical-data",
            params=params,
            as_json=False,
        )

        try:
            rows = extract_price_rows(html)
        except ExtractionError as e:
            logger.warning("Could not read prices for %s: %s", coin_id, e)
            raise

        return [Price.from_row(row) for row in rows]

    def get_markets(self, coin_id: str) -> list[Market]:
        """
        Fetch per-exchange market data by scraping the currency page.

        Args:
            coin_id: CoinMarketCap coin ID

        Returns:
            List of Market objects in page order

        Raises:
            ExtractionError: If the page has no readable markets table
        """
        if not coin_id:
            raise ValueError("coin_id must be a non-empty string")

        html = self._request(
            f"{self.website_url}/{coin_id}#{MARKETS_ANCHOR}",
            as_json=False,
        )

        try:
            rows = extract_market_rows(html)
        except ExtractionError as e:
            logger.warning("Could not read markets for %s: %s", coin_id, e)
            raise

        return [Market.from_row(row) for row in rows]
