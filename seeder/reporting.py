"""
seeder/reporting.py

Reporter capability for seed diagnostics.

Components never print or reach for a global logger directly; they call an
injected ``Reporter``. The default implementation writes one compact JSON
line per event to stdlib logging.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

logger = logging.getLogger("seeder")


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


class Reporter(Protocol):
    def debug(self, event: str, **fields: Any) -> None:
        ...

    def info(self, event: str, **fields: Any) -> None:
        ...

    def warning(self, event: str, **fields: Any) -> None:
        ...

    def error(self, event: str, **fields: Any) -> None:
        ...


class LoggingReporter:
    """
    Reporter backed by a stdlib logger.
    """

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def debug(self, event: str, **fields: Any) -> None:
        log_event(self._logger, logging.DEBUG, event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        log_event(self._logger, logging.INFO, event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        log_event(self._logger, logging.WARNING, event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        log_event(self._logger, logging.ERROR, event, **fields)


default_reporter = LoggingReporter()
