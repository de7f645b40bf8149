"""
Tests for DataFrame conversion.

Tests cover:
- Column layout and row order
- Decimal conversion of price values
- Edge cases
"""

from decimal import Decimal

import pandas as pd
import pytest

from api.coinmarketcap import Market, Price, Ticker
from data.processor import (
    ProcessorError,
    markets_to_dataframe,
    prices_to_dataframe,
    records_to_dataframe,
    tickers_to_dataframe,
)


@pytest.fixture
def prices():
    return [
        Price("Jan 02, 2020", "7202.55", "7212.16", "6935.27", "6985.47", "20802083465", "126699395235"),
        Price("Jan 01, 2020", "7194.89", "7254.33", "7174.94", "7200.17", "18565664997", "-"),
    ]


@pytest.fixture
def tickers(ticker_body):
    # Reversed so sorting by rank is observable
    return [Ticker.from_dict(d) for d in reversed(ticker_body)]


class TestRecordsToDataFrame:
    """Tests for the generic conversion."""

    def test_columns_are_wire_keys(self, prices):
        df = records_to_dataframe(prices)

        assert list(df.columns) == [
            "date",
            "open_usd",
            "high_usd",
            "low_usd",
            "close_usd",
            "24h_volume_usd",
            "market_cap_usd",
        ]
        assert len(df) == 2

    def test_empty_input(self):
        df = records_to_dataframe([])

        assert isinstance(df, pd.DataFrame)
        assert df.empty

    def test_mixed_types_raise(self, prices):
        market = Market("Binance", "BTC/USDT", "$1", "$2", "3%")

        with pytest.raises(ProcessorError):
            records_to_dataframe([prices[0], market])


class TestPricesToDataFrame:
    """Tests for price frames."""

    def test_indexed_by_date_in_order(self, prices):
        df = prices_to_dataframe(prices)

        assert list(df.index) == ["Jan 02, 2020", "Jan 01, 2020"]
        assert df.loc["Jan 01, 2020", "open_usd"] == "7194.89"

    def test_as_decimal(self, prices):
        df = prices_to_dataframe(prices, as_decimal=True)

        assert df.loc["Jan 02, 2020", "close_usd"] == Decimal("6985.47")
        assert isinstance(df.loc["Jan 02, 2020", "24h_volume_usd"], Decimal)

    def test_as_decimal_unparseable_is_missing(self, prices):
        df = prices_to_dataframe(prices, as_decimal=True)

        assert pd.isna(df.loc["Jan 01, 2020", "market_cap_usd"])

    def test_empty(self):
        assert prices_to_dataframe([]).empty


class TestTickersToDataFrame:
    """Tests for ticker frames."""

    def test_sorted_by_rank(self, tickers):
        df = tickers_to_dataframe(tickers)

        assert list(df.index) == [1, 2]
        assert df.loc[1, "id"] == "bitcoin"
        assert df.loc[2, "price_usd"] == "12.1844"


class TestMarketsToDataFrame:
    """Tests for market frames."""

    def test_page_order(self):
        markets = [
            Market("Binance", "BTC/USDT", "$1,507,186,253", "$7,195.07", "8.52%"),
            Market("Kraken", "BTC/EUR", "$40,204,507", "$7,188.25", "0.23%"),
        ]

        df = markets_to_dataframe(markets)

        assert list(df["source"]) == ["Binance", "Kraken"]
        assert df.iloc[1]["volume_percent"] == "0.23%"
