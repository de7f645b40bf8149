"""
Configuration constants for the CMC client.

CMC - CoinMarketCap ticker, price history and market data retrieval.
"""

# =============================================================================
# Provider Addresses
# =============================================================================

# Documented JSON API (tickers)
CMC_API_BASE_URL = "https://api.coinmarketcap.com/v1"

# Public website (historical prices and markets are scraped from here)
CMC_WEBSITE_BASE_URL = "https://coinmarketcap.com/currencies"

# Same-page anchor of the markets table on a currency page
MARKETS_ANCHOR = "markets"

# =============================================================================
# HTTP Configuration
# =============================================================================

# Seconds before a request is abandoned (applies to connect and read)
REQUEST_TIMEOUT = 30

USER_AGENT = "CMC/0.1.0"

# =============================================================================
# Provider Defaults
# =============================================================================

# Number of tickers the API returns when no limit is sent
DEFAULT_TICKER_LIMIT = 100

# =============================================================================
# Scraping Layout
# =============================================================================

# Historical-data rows: open, high, low, close, volume, market cap
PRICE_VALUE_COLUMNS = 6

# Markets rows: two link cells (source, pair) and three plain cells
# (volume, price, volume percentage)
MARKET_LINK_COLUMNS = 2
MARKET_VALUE_COLUMNS = 3
