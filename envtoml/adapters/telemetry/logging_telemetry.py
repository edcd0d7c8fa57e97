"""Telemetry adapter that forwards events to the standard logging module."""

from __future__ import annotations

import logging
from typing import Any

_LOGGER = logging.getLogger("envtoml.telemetry")

_FAILURE_EVENTS = frozenset({"conversion_failed"})


class LoggingTelemetry:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _LOGGER

    def log(self, event: str, **fields: Any) -> None:
        level = logging.ERROR if event in _FAILURE_EVENTS else logging.INFO
        self._logger.log(level, event, extra={"event": event, "fields": fields})
