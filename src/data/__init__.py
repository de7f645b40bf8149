"""
Data conversion modules.
"""

from .processor import (
    ProcessorError,
    markets_to_dataframe,
    prices_to_dataframe,
    records_to_dataframe,
    tickers_to_dataframe,
)

__all__ = [
    "ProcessorError",
    "records_to_dataframe",
    "prices_to_dataframe",
    "tickers_to_dataframe",
    "markets_to_dataframe",
]
