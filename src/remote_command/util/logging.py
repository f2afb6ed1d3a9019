"""Logging setup for the command server.

Every record goes to stderr. Over the stdio transport, stdout carries
protocol frames only.
"""

from __future__ import annotations

import logging
import sys
from typing import Final

ROOT_LOGGER_NAME: Final[str] = "remote_command"
DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
# The SDK logs one INFO line per request; keep that out of the command log.
SDK_LOGGER_NAMES: Final[tuple[str, ...]] = ("mcp",)
_LEVELS: Final[dict[str, int]] = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def configure_logging(level: str = "INFO", fmt: str | None = None) -> None:
    """Send server logs to stderr at the requested level.

    Protocol SDK loggers stay at WARNING unless ``level`` is DEBUG.

    Args:
        level: Logging level name (e.g., "INFO", "DEBUG").
        fmt: Optional logging format string.
    """

    resolved = _normalize_level(level)
    logging.basicConfig(
        level=resolved,
        format=fmt or DEFAULT_LOG_FORMAT,
        stream=sys.stderr,
    )
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(resolved)
    sdk_level = logging.DEBUG if resolved <= logging.DEBUG else max(resolved, logging.WARNING)
    for name in SDK_LOGGER_NAMES:
        logging.getLogger(name).setLevel(sdk_level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``remote_command`` namespace.

    Component names such as ``"ProcessRunner"`` are nested under the package
    logger; names already inside the namespace are used as given.
    """

    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _normalize_level(level: str) -> int:
    normalized = level.strip().upper()
    return _LEVELS.get(normalized, logging.INFO)
