"""
Logging configuration for the CMC client.

The library only creates loggers under the ``cmc`` namespace; nothing is
emitted until the application calls ``setup_logging`` or attaches its own
handlers.
"""

import logging
import sys
from pathlib import Path

LOGGER_NAMESPACE = "cmc"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

# Silent until configured
logging.getLogger(LOGGER_NAMESPACE).addHandler(logging.NullHandler())


def _resolve_level(level: int | str) -> int:
    """Accept ``logging.DEBUG`` as well as ``"debug"``."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, LOG_DATE_FORMAT))
    return handler


def setup_logging(
    level: int | str = logging.WARNING,
    log_file: Path | None = None,
    verbose: bool = False,
) -> logging.Logger:
    """
    Send client log records to stderr and, optionally, a file.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Level name or number (default: WARNING)
        log_file: Optional path to log file; it receives every record
            the namespace logger lets through
        verbose: Shortcut for DEBUG with the detailed format, which
            shows every outgoing request

    Returns:
        The ``cmc`` namespace logger
    """
    level = logging.DEBUG if verbose else _resolve_level(level)

    cmc_logger = logging.getLogger(LOGGER_NAMESPACE)
    cmc_logger.setLevel(level)
    for old in list(cmc_logger.handlers):
        cmc_logger.removeHandler(old)
        old.close()

    cmc_logger.addHandler(_handler(
        logging.StreamHandler(sys.stderr),
        level,
        LOG_FORMAT if verbose else CONSOLE_FORMAT,
    ))
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        cmc_logger.addHandler(_handler(
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.DEBUG,
            LOG_FORMAT,
        ))

    # urllib3 logs every connection at DEBUG
    for noisy in ("urllib3", "requests"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return cmc_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``cmc`` namespace.

    Usage:
        logger = get_logger(__name__)
        logger.debug("GET %s", url)
    """
    if name != LOGGER_NAMESPACE and not name.startswith(f"{LOGGER_NAMESPACE}."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)
