"""Logging configuration for the application and publishing use cases."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional


_CONSOLE_HANDLER_ATTR = "_is_console_log_handler"


if TYPE_CHECKING:  # pragma: no cover
    from flask import Flask


class _EventFormatter(logging.Formatter):
    """Append the ``event`` extra to console output when present."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        event = getattr(record, "event", None)
        if event:
            return f"{message} [event={event}]"
        return message


def _create_console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_EventFormatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _resolve_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def ensure_console_logging(logger: logging.Logger, level: Any = logging.INFO) -> None:
    """Attach the console handler to *logger* if missing and apply *level*."""

    resolved = _resolve_level(level)
    for handler in logger.handlers:
        if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
            handler.setLevel(resolved)
            break
    else:
        logger.addHandler(_create_console_handler(resolved))

    logger.setLevel(resolved)


def configure_app_logging(app: "Flask") -> None:
    """Send ``app.logger`` and the feature loggers to the console."""

    level = logging.DEBUG if app.debug else app.config.get("LOG_LEVEL", "INFO")
    ensure_console_logging(app.logger, level)
    ensure_console_logging(logging.getLogger("features"), level)


class StructuredLogger:
    """Helper for emitting structured JSON log events."""

    def __init__(self, logger: logging.Logger, defaults: Optional[Mapping[str, Any]] = None):
        self._logger = logger
        self._defaults: Dict[str, Any] = dict(defaults or {})

    def bind(self, **extra: Any) -> "StructuredLogger":
        """Return a new logger with additional default fields."""

        merged = dict(self._defaults)
        merged.update(extra)
        return StructuredLogger(self._logger, merged)

    def _emit(self, level: int, event: str, **fields: Any) -> None:
        payload: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "event": event,
            "level": logging.getLevelName(level),
        }
        payload.update(self._defaults)
        payload.update(fields)
        message = json.dumps(payload, ensure_ascii=False, default=str)
        self._logger.log(level, message, extra={"event": event})

    def log(self, level: int, event: str, **fields: Any) -> None:
        self._emit(level, event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit(logging.INFO, event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._emit(logging.WARNING, event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit(logging.ERROR, event, **fields)


def structured_logger(logger_name: str, **defaults: Any) -> StructuredLogger:
    """Return a :class:`StructuredLogger` for *logger_name*."""

    return StructuredLogger(logging.getLogger(logger_name), defaults)
