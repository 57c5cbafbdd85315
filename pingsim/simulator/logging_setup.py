from __future__ import annotations

"""Structured JSON logging for the simulator CLI and library.

Features:
 * Thread-safe idempotent configuration (one JSON handler per logger)
 * Safe reconfiguration (level & static fields update in place)
 * UTC timestamps with millisecond precision (Z suffix)
 * Lowercase level names, standard context fields
 * Non-serializable values fall back to str()
 * User fields isolated under 'fields' so they never clobber base keys

Records go to stderr by default: stdout carries the transcript itself.

Usage example:
    from pingsim.simulator.logging_setup import configure_json_logging
    logger = configure_json_logging(level="INFO")
    logger.info(
        "session started",
        extra={"event": "session_started", "fields": {"seed": 1234, "hops": 7}},
    )

Module loggers are children of ``pingsim`` and need no setup of their own:
    log = logging.getLogger(__name__)
"""

from datetime import datetime, timezone
import json
import logging
import sys
from threading import RLock
from typing import Any, Mapping, MutableMapping

ROOT_LOGGER_NAME = "pingsim"
DEFAULT_LEVEL = "WARNING"

_lock = RLock()

RESERVED = {
    "ts",
    "level",
    "logger",
    "pid",
    "tid",
    "module",
    "func",
    "line",
    "msg",
    "event",
}


def coerce_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        lvl = logging.getLevelName(level.strip().upper())
        if isinstance(lvl, int):
            return lvl
    return logging.getLevelName(DEFAULT_LEVEL)


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, *, static: dict[str, Any] | None = None) -> None:
        super().__init__()
        self._static = static or {}

    def format(self, record: logging.LogRecord) -> str:
        ts = (
            datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )
        msg = record.getMessage()
        event = getattr(record, "event", None)
        if event == msg:
            event = None

        base: dict[str, Any] = {
            "ts": ts,
            "level": record.levelname.lower(),
            "logger": record.name,
            "pid": record.process,
            "tid": record.thread,
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
            "msg": msg,
        }
        if event:
            base["event"] = event
        if self._static:
            base["static"] = self._static

        fields_obj = getattr(record, "fields", {})
        user_fields: MutableMapping[str, Any]
        if isinstance(fields_obj, Mapping):
            user_fields = dict(fields_obj)
        else:
            user_fields = {"_fields_type": str(type(fields_obj))}
        if user_fields:
            base["fields"] = user_fields

        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)

        try:
            return json.dumps(base, ensure_ascii=False, separators=(",", ":"), default=str)
        except (TypeError, ValueError) as exc:  # pragma: no cover (very unlikely)
            fallback = {
                "ts": ts,
                "level": "error",
                "logger": record.name,
                "msg": "log_serialization_failed",
                "error": str(exc),
            }
            return json.dumps(fallback, separators=(",", ":"))


def configure_json_logging(
    *,
    logger_name: str = ROOT_LOGGER_NAME,
    level: int | str | None = DEFAULT_LEVEL,
    stream: Any | None = None,
    force: bool = False,
    extra_static: dict[str, Any] | None = None,
) -> logging.Logger:
    """Configure or update a structured JSON logger.

    Parameters
    ----------
    logger_name: Name of the logger to configure.
    level: Log level (int or name string); unknown names fall back to WARNING.
    stream: Optional handler stream (defaults to sys.stderr).
    force: If True, replace any existing JSON handler with a fresh one.
    extra_static: Optional static metadata included under key 'static'.
    """
    numeric_level = coerce_level(level)
    with _lock:
        logger = logging.getLogger(logger_name)
        logger.propagate = False
        logger.setLevel(numeric_level)

        existing = next(
            (h for h in logger.handlers if getattr(h, "_pingsim_json", False)),
            None,
        )
        if existing is not None and not force:
            existing.setLevel(numeric_level)
            existing.setFormatter(JsonFormatter(static=extra_static))
            return logger
        if existing is not None:
            logger.removeHandler(existing)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(numeric_level)
        handler.setFormatter(JsonFormatter(static=extra_static))
        setattr(handler, "_pingsim_json", True)
        logger.addHandler(handler)
        return logger


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit ``event`` on ``logger`` with ``fields`` nested under 'fields'."""
    logger.log(level, event, extra={"event": event, "fields": fields})


__all__ = [
    "configure_json_logging",
    "coerce_level",
    "log_event",
    "JsonFormatter",
    "RESERVED",
    "ROOT_LOGGER_NAME",
]
