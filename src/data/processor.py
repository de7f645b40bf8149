"""
Conversion of client records to pandas DataFrames.

Values stay text by default so nothing is rounded. Price frames can
instead hold decimal.Decimal values for arithmetic; floats are never
produced.
"""

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

import pandas as pd

from api.coinmarketcap import Market, Price, Ticker

PRICE_VALUE_COLUMNS = [
    "open_usd",
    "high_usd",
    "low_usd",
    "close_usd",
    "24h_volume_usd",
    "market_cap_usd",
]


class ProcessorError(Exception):
    """Base exception for processor errors."""

    pass


def records_to_dataframe(records: Sequence[Ticker | Price | Market]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per record.

    Args:
        records: Records of a single type

    Returns:
        DataFrame whose columns are the records' wire keys

    Raises:
        ProcessorError: If the records are of different types
    """
    if not records:
        return pd.DataFrame()

    record_types = {type(r) for r in records}
    if len(record_types) > 1:
        names = sorted(t.__name__ for t in record_types)
        raise ProcessorError(f"Cannot mix record types: {', '.join(names)}")

    return pd.DataFrame([r.to_dict() for r in records])


def _to_decimal(value: str) -> Decimal | None:
    # Scraped cells can hold "-" or "" where the site shows no value
    try:
        return Decimal(value)
    except InvalidOperation:
        return None


def prices_to_dataframe(
    prices: Sequence[Price],
    as_decimal: bool = False,
) -> pd.DataFrame:
    """
    Build a date-indexed DataFrame of daily prices.

    Rows keep the order returned by the client.

    Args:
        prices: Price records
        as_decimal: Convert value columns to decimal.Decimal (unparseable
            cells become missing values)

    Returns:
        DataFrame indexed by date
    """
    df = records_to_dataframe(prices)
    if df.empty:
        return df

    if as_decimal:
        for column in PRICE_VALUE_COLUMNS:
            df[column] = df[column].map(_to_decimal).astype(object)

    return df.set_index("date")


def tickers_to_dataframe(tickers: Sequence[Ticker]) -> pd.DataFrame:
    """Build a DataFrame of tickers indexed by integer rank, best first."""
    df = records_to_dataframe(tickers)
    if df.empty:
        return df

    df["rank"] = df["rank"].astype(int)
    return df.set_index("rank").sort_index()


def markets_to_dataframe(markets: Sequence[Market]) -> pd.DataFrame:
    """Build a DataFrame of exchange markets in page order."""
    return records_to_dataframe(markets)
