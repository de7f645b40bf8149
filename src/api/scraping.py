"""
Structural HTML extraction for CoinMarketCap website pages.

The historical-data and markets pages have no stable interface, so rows are
read by fixed cell position. This module only turns HTML into rows of cell
strings; mapping rows to records happens in the client. A markup change on
the provider side should only require changes here.
"""

from bs4 import BeautifulSoup, Tag

from config import MARKET_LINK_COLUMNS, MARKET_VALUE_COLUMNS, PRICE_VALUE_COLUMNS

from .exceptions import ExtractionError

ROW_SELECTOR = "table tr"

# Historical-data page
DATE_CELL_SELECTOR = "td.text-left"
VALUE_CELL_SELECTOR = "[data-format-value]"

# Markets page
LINK_CELL_SELECTOR = "td a"
SPAN_CELL_SELECTOR = "td span"


def clean_number(text: str) -> str:
    """Strip thousands separators: ``"1,234.56"`` -> ``"1234.56"``."""
    return text.replace(",", "")


def _cell_text(cell: Tag) -> str:
    return cell.get_text(strip=True)


def _table_rows(html: str, page: str) -> list[Tag]:
    """
    Return every data row of the document's tables.

    html.parser does not insert the implied ``<tbody>``, so rows are
    selected under ``table`` directly. Header rows (no ``td``) are skipped.

    Raises:
        ExtractionError: If the document has no data rows
    """
    soup = BeautifulSoup(html, "html.parser")
    rows = [row for row in soup.select(ROW_SELECTOR) if row.find("td") is not None]
    if not rows:
        raise ExtractionError(f"No table rows found on {page} page")
    return rows


def extract_price_rows(html: str) -> list[list[str]]:
    """
    Extract daily price rows from a historical-data page.

    Each row holds a date cell followed by value cells carrying a
    ``data-format-value`` attribute, in the order open, high, low,
    close, volume, market cap. The visible text of each cell is used.

    Args:
        html: Page source

    Returns:
        One ``[date, open, high, low, close, volume, market_cap]`` list
        per table row, in document order, commas removed from values

    Raises:
        ExtractionError: If there are no rows or a row is incomplete
    """
    result: list[list[str]] = []

    for index, row in enumerate(_table_rows(html, "historical-data")):
        date_cell = row.select_one(DATE_CELL_SELECTOR) or row.find("td")
        if date_cell is None:
            raise ExtractionError(f"Row {index} has no date cell")

        values = row.select(VALUE_CELL_SELECTOR)
        if len(values) < PRICE_VALUE_COLUMNS:
            raise ExtractionError(
                f"Row {index} has {len(values)} value cells, "
                f"expected {PRICE_VALUE_COLUMNS}"
            )

        result.append(
            [_cell_text(date_cell)]
            + [clean_number(_cell_text(v)) for v in values[:PRICE_VALUE_COLUMNS]]
        )

    return result


def extract_market_rows(html: str) -> list[list[str]]:
    """
    Extract exchange market rows from a currency page.

    Args:
        html: Page source

    Returns:
        One ``[source, pair, volume, price, volume_percent]`` list per
        table row, in document order

    Raises:
        ExtractionError: If there are no rows or a row is incomplete
    """
    result: list[list[str]] = []

    for index, row in enumerate(_table_rows(html, "markets")):
        links = row.select(LINK_CELL_SELECTOR)
        spans = row.select(SPAN_CELL_SELECTOR)
        if len(links) < MARKET_LINK_COLUMNS or len(spans) < MARKET_VALUE_COLUMNS:
            raise ExtractionError(
                f"Row {index} has {len(links)} link and {len(spans)} value cells, "
                f"expected {MARKET_LINK_COLUMNS} and {MARKET_VALUE_COLUMNS}"
            )

        result.append(
            [_cell_text(a) for a in links[:MARKET_LINK_COLUMNS]]
            + [_cell_text(s) for s in spans[:MARKET_VALUE_COLUMNS]]
        )

    return result
