"""
Pytest configuration and fixtures for CMC client tests.
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (live CoinMarketCap calls)"
    )


def pytest_addoption(parser):
    """Add command line option for integration tests."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests that call the live provider",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --run-integration is specified."""
    if config.getoption("--run-integration"):
        os.environ["RUN_INTEGRATION_TESTS"] = "1"
        return

    skip_integration = pytest.mark.skip(reason="Use --run-integration to run live tests")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture
def mock_response():
    """
    Create a mock requests.Response factory.

    Pass json_data for API bodies or text for HTML pages. With neither,
    json() raises ValueError like a non-JSON body would.
    """
    def _mock(status_code=200, json_data=None, text=None):
        response = MagicMock()
        response.status_code = status_code
        if json_data is not None:
            response.json.return_value = json_data
            response.text = str(json_data)
        else:
            response.json.side_effect = ValueError("Expecting value: line 1 column 1")
            response.text = text or ""
        return response
    return _mock


@pytest.fixture
def session():
    """A stand-in for requests.Session supplied by the caller."""
    return MagicMock()


@pytest.fixture
def ticker_body():
    """Two-element ticker list as returned by the ticker API."""
    return [
        {
            "id": "bitcoin",
            "name": "Bitcoin",
            "symbol": "BTC",
            "rank": "1",
            "price_usd": "573.137",
            "price_btc": "1.0",
            "24h_volume_usd": "72855700.0",
            "market_cap_usd": "9080883500.0",
            "available_supply": "15844176.0",
            "total_supply": "15844176.0",
            "percent_change_1h": "0.04",
            "percent_change_24h": "-0.3",
            "percent_change_7d": "-0.57",
            "last_updated": "1472762067",
        },
        {
            "id": "ethereum",
            "name": "Ethereum",
            "symbol": "ETH",
            "rank": "2",
            "price_usd": "12.1844",
            "price_btc": "0.021262",
            "24h_volume_usd": "24085900.0",
            "market_cap_usd": "1018098455.0",
            "available_supply": "83557537.0",
            "total_supply": "83557537.0",
            "percent_change_1h": "-0.58",
            "percent_change_24h": "6.34",
            "percent_change_7d": "8.59",
            "last_updated": "1472762062",
        },
    ]


def render_price_page(rows):
    """Render a historical-data page with one table row per cell list."""
    body = ""
    for date, *values in rows:
        cells = "".join(
            f'<td data-format-value="{v.replace(",", "")}">{v}</td>' for v in values
        )
        body += f'<tr class="text-right"><td class="text-left">{date}</td>{cells}</tr>\n'
    return (
        "<html><body><div class='table-responsive'><table class='table'>"
        "<thead><tr><th>Date</th><th>Open</th><th>High</th><th>Low</th>"
        "<th>Close</th><th>Volume</th><th>Market Cap</th></tr></thead>"
        f"<tbody>\n{body}</tbody></table></div></body></html>"
    )


def render_market_page(rows):
    """Render a markets page with one table row per (source, pair, volume, price, pct)."""
    body = ""
    for i, (source, pair, volume, price, percent) in enumerate(rows, start=1):
        body += (
            f"<tr><td>{i}</td>"
            f'<td><a href="/exchanges/{source.lower()}/">{source}</a></td>'
            f'<td><a href="https://{source.lower()}.example/{pair}">{pair}</a></td>'
            f'<td class="text-right"><span class="volume">{volume}</span></td>'
            f'<td class="text-right"><span class="price">{price}</span></td>'
            f'<td class="text-right"><span>{percent}</span></td></tr>\n'
        )
    return (
        "<html><body><table id='markets-table'>"
        "<thead><tr><th>#</th><th>Source</th><th>Pair</th><th>Volume (24h)</th>"
        "<th>Price</th><th>Volume (%)</th></tr></thead>"
        f"<tbody>\n{body}</tbody></table></body></html>"
    )


@pytest.fixture
def price_page():
    """Renderer for historical-data page fixtures."""
    return render_price_page


@pytest.fixture
def market_page():
    """Renderer for markets page fixtures."""
    return render_market_page
