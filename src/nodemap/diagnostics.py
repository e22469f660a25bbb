"""Diagnostic sinks: the stdlib LoggingSink and the structured ContextLogger."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

__all__ = ["DiagnosticSink", "LoggingSink", "ContextLogger", "LOG_LEVELS"]

LOG_LEVELS = {
    "trace": 0,
    "debug": 10,
    "info": 20,
    "warn": 30,
    "error": 40,
    "fatal": 50,
}

_REDACTED = "***REDACTED***"


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives the warnings emitted by optional accessors."""

    def warn(self, message: str, extra: dict[str, Any] | None = None) -> None: ...


class LoggingSink:
    """Forwards warnings to a stdlib logger.

    The ``extra`` mapping is attached to the log record, so handlers and
    formatters can read ``record.path`` and ``record.node``.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("nodemap.accessors")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def warn(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._logger.warning(message, extra=extra)


class ContextLogger:
    """Standalone structured logger with bound context and redaction."""

    def __init__(
        self,
        name: str,
        output_format: str = "json",
        level: str = "info",
        redact_sensitive: bool = True,
        output: Any = None,
    ) -> None:
        self._name = name
        self._output_format = output_format
        self._level = level
        self._level_value = LOG_LEVELS.get(level, 20)
        self._redact_sensitive = redact_sensitive
        self._output = output if output is not None else sys.stderr
        self._context: dict[str, Any] = {}

    def bind(self, **fields: Any) -> ContextLogger:
        """Return a logger that adds ``fields`` to every entry's context."""
        logger = ContextLogger(
            name=self._name,
            output_format=self._output_format,
            level=self._level,
            redact_sensitive=self._redact_sensitive,
            output=self._output,
        )
        logger._context = {**self._context, **fields}
        return logger

    def _emit(self, level_name: str, message: str, extra: dict[str, Any] | None) -> None:
        level_value = LOG_LEVELS.get(level_name, 20)
        if level_value < self._level_value:
            return

        redacted_extra = extra
        if extra is not None and self._redact_sensitive:
            redacted_extra = {k: (_REDACTED if k.startswith("_secret_") else v) for k, v in extra.items()}

        now = datetime.now(timezone.utc)
        entry = {
            "timestamp": now.isoformat(),
            "level": level_name,
            "message": message,
            "logger": self._name,
            "context": self._context,
            "extra": redacted_extra,
        }

        if self._output_format == "json":
            self._output.write(json.dumps(entry, default=str) + "\n")
        else:
            ts = now.strftime("%Y-%m-%d %H:%M:%S")
            lvl = level_name.upper()
            ctx_str = "".join(f" [{k}={v}]" for k, v in self._context.items())
            extras_str = ""
            if redacted_extra:
                extras_str = " " + " ".join(f"{k}={v}" for k, v in redacted_extra.items())
            self._output.write(f"{ts} [{lvl}] [{self._name}]{ctx_str} {message}{extras_str}\n")

    def trace(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("trace", message, extra)

    def debug(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("debug", message, extra)

    def info(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("info", message, extra)

    def warn(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("warn", message, extra)

    def error(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("error", message, extra)

    def fatal(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("fatal", message, extra)
