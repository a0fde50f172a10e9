"""Opt-in log formatting for the ``vercel_api`` logger.

The library only emits records (DEBUG per response, WARNING for rate-limit
waits and transport failures).  Applications that want structured output
call :func:`setup_logging` once; both formatters tag each line with the ID
of the API call that produced it.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

from vercel_api.config import settings
from vercel_api.services.request_context import get_request_id

LIBRARY_LOGGER = "vercel_api"

# Everything a bare LogRecord carries; other attributes came from ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


def _created(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _exception_text(record: logging.LogRecord) -> str | None:
    if not record.exc_info or record.exc_info[0] is None:
        return None
    return "".join(traceback.format_exception(*record.exc_info))


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, request_id, extras."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": _created(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if request_id := get_request_id():
            entry["request_id"] = request_id
        entry.update(_extras(record))
        if (exc := _exception_text(record)) is not None:
            entry["exception"] = exc
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        request_id = get_request_id()
        tag = f"[{request_id[:12]}] " if request_id else ""
        line = (
            f"{_created(record):%Y-%m-%d %H:%M:%S} {record.levelname:<8} "
            f"{tag}{record.name} - {record.getMessage()}"
        )
        if (exc := _exception_text(record)) is not None:
            line += "\n" + exc
        return line


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JSONFormatter,
    "text": TextFormatter,
}


def setup_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    logger_name: str = LIBRARY_LOGGER,
) -> logging.Logger:
    """Give the library logger a single stderr handler and return it.

    Unset arguments fall back to ``settings.log_level`` and
    ``settings.log_format``; unknown formats use text.  Calling it again
    replaces the handler.
    """
    level = (log_level or settings.log_level).upper()
    fmt = (log_format or settings.log_format).lower()

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level, logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_FORMATTERS.get(fmt, TextFormatter)())
    logger.addHandler(handler)
    return logger
