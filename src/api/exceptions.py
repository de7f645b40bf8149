"""
Exceptions raised by the CoinMarketCap client.

Every operation either returns complete results or raises one of these;
nothing is retried and no partial result is returned.
"""


class CoinMarketCapError(Exception):
    """Base exception for CoinMarketCap client errors."""

    pass


class TransportError(CoinMarketCapError):
    """Raised when the request could not be sent or no response arrived."""

    pass


class APIError(TransportError):
    """Raised when the provider answers with a non-200 status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(CoinMarketCapError):
    """Raised when a JSON body is malformed or not shaped like tickers."""

    pass


class ExtractionError(CoinMarketCapError):
    """
    Raised when an HTML page lacks the expected table structure.

    A changed page layout and an empty result look the same to the
    scraper, so both raise this error.
    """

    pass


class ResponseShapeError(CoinMarketCapError):
    """Raised when well-formed JSON has an unexpected number of results."""

    pass
