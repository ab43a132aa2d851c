"""Logging setup for loadpool.

Log lines come from many worker threads plus the stats thread, so both
formats carry the emitting thread's name. Stats reports attach their
counters as ``extra`` fields; the JSON format lifts those into top-level
keys so a report stream can be parsed without scraping message text.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

# ``extra`` keys set by the stats reporter, copied verbatim into JSON lines.
STATS_FIELDS = ("elapsed_seconds", "active_workers", "url", "requests", "errors")

_TEXT_FORMAT = "%(asctime)s [%(levelname)-8s] %(threadName)s %(name)s: %(message)s"

# Third-party loggers that log every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


class _JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Always emits timestamp, level, logger, thread and message, plus any
    stats fields present on the record and a formatted exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        for key in STATS_FIELDS:
            if key in record.__dict__:
                log_entry[key] = record.__dict__[key]
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def setup_logging(
    level: int = logging.INFO,
    *,
    json_format: bool = False,
) -> logging.Logger:
    """Configure and return the root ``loadpool`` logger.

    Installs a single stderr handler on the ``loadpool`` namespace. Calling
    it again only updates the level. The per-request INFO chatter of
    ``httpx`` and ``httpcore`` is raised to WARNING unless ``level`` is
    DEBUG or lower, since one line per request drowns the stats reports.

    Args:
        level: Logging level (e.g., ``logging.DEBUG``). Defaults to INFO.
        json_format: If True, emit one JSON object per line instead of
            human-readable text.

    Returns:
        The configured ``loadpool`` logger.
    """
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    logger = logging.getLogger("loadpool")
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        formatter: logging.Formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the ``loadpool`` namespace.

    Args:
        name: Logger name, appended to the ``loadpool.`` prefix, e.g.
            ``get_logger("engine.pool")``.

    Returns:
        The child logger.
    """
    return logging.getLogger(f"loadpool.{name}")
