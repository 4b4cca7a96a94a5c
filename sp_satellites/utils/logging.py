"""
Structured logging utilities for the satellite list client.

Every client operation logs a trace line carrying structured fields
(`operation`, `method`, `url`, `status`, `duration_ms`). The console format
is meant for people at a terminal; the JSON format flattens those fields into
one object per line for log shippers.

Usage:
    from sp_satellites.utils.logging import configure_from_settings, get_logger

    configure_from_settings(get_settings())
    log = get_logger(__name__)
    log.info("Listing satellites", extra={"operation": "list", "top": 100})
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from sp_satellites.config import Settings

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

# Attributes every LogRecord carries; anything else arrived through `extra`.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "extra"}

# Third-party loggers that log every request at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _json_formatter(record: logging.LogRecord) -> str:
    """Serialize a record and its structured fields to one JSON line."""
    payload: Dict[str, Any] = {
        "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    payload.update(
        (key, value)
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    )
    # older call sites pass extra={"extra": {...}}
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        payload.update(nested)
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def build_logging_config(level: str = "INFO", json_logs: bool = False) -> Dict[str, Any]:
    """
    Return the dictConfig mapping for the given level and output format.

    Records go to stderr so command output on stdout stays machine-readable.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "json" if json_logs else "console",
                "level": level,
            }
        },
        "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Install the root handler.

    Parameters
    ----------
    level : str
        Level name such as "DEBUG" or "WARNING".
    json_logs : bool
        Emit JSON lines instead of the console format.
    """
    logging.config.dictConfig(build_logging_config(level=level, json_logs=json_logs))


def configure_from_settings(settings: "Settings") -> None:
    """Apply `LOG_LEVEL` and `LOG_JSON` from settings."""
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Module logger; the root logger when `name` is None.
    """
    return logging.getLogger(name)


__all__ = [
    "JsonFormatter",
    "build_logging_config",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
