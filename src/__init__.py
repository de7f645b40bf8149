"""
CMC - CoinMarketCap market data client.

This package provides tools to:
- List and look up coin tickers from the CoinMarketCap JSON API
- Scrape daily historical prices and exchange markets from the website
- Convert the results to pandas DataFrames
"""

__app_name__ = "cmc"
