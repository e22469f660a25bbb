"""Tests for LoggingSink and ContextLogger."""

from __future__ import annotations

import io
import json
import logging

from nodemap.accessors import NodeAccessor
from nodemap.diagnostics import ContextLogger, DiagnosticSink, LoggingSink
from nodemap.node import JsonNode


class TestLoggingSink:
    """Test the stdlib logging sink."""

    def test_default_logger_name(self) -> None:
        """LoggingSink defaults to the nodemap.accessors logger."""
        assert LoggingSink().logger.name == "nodemap.accessors"

    def test_warn_emits_warning_with_extra(self, caplog) -> None:
        """warn() emits a WARNING record with extra attributes."""
        sink = LoggingSink(logging.getLogger("test.sink"))
        with caplog.at_level(logging.WARNING, logger="test.sink"):
            sink.warn("careful", extra={"path": "a", "node": "{}"})
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelname == "WARNING"
        assert record.getMessage() == "careful"
        assert record.node == "{}"

    def test_satisfies_protocol(self) -> None:
        """LoggingSink is a DiagnosticSink."""
        assert isinstance(LoggingSink(), DiagnosticSink)


class TestContextLoggerLevels:
    """Test ContextLogger level filtering."""

    def test_warn_emitted_at_info_level(self) -> None:
        """warn() is emitted when level='info'."""
        buf = io.StringIO()
        logger = ContextLogger(name="test", level="info", output=buf)
        logger.warn("careful")
        data = json.loads(buf.getvalue())
        assert data["level"] == "warn"
        assert data["message"] == "careful"

    def test_debug_suppressed_at_info_level(self) -> None:
        """debug() is not emitted when level='info'."""
        buf = io.StringIO()
        logger = ContextLogger(name="test", level="info", output=buf)
        logger.debug("should not appear")
        assert buf.getvalue() == ""

    def test_warn_suppressed_at_error_level(self) -> None:
        """warn() is not emitted when level='error'."""
        buf = io.StringIO()
        logger = ContextLogger(name="test", level="error", output=buf)
        logger.warn("quiet")
        assert buf.getvalue() == ""

    def test_all_level_filtering(self) -> None:
        """Level filtering works for all levels."""
        levels = ["trace", "debug", "info", "warn", "error", "fatal"]
        for i, threshold in enumerate(levels):
            buf = io.StringIO()
            logger = ContextLogger(name="test", level=threshold, output=buf)
            for emit_level in levels:
                getattr(logger, emit_level)(f"msg at {emit_level}")
            lines = [line for line in buf.getvalue().strip().split("\n") if line]
            assert len(lines) == len(levels) - i


class TestContextLoggerFormats:
    """Test ContextLogger JSON and text output."""

    def test_json_includes_all_fields(self) -> None:
        """JSON includes timestamp, logger, context and extra."""
        buf = io.StringIO()
        logger = ContextLogger(name="mylog", output=buf).bind(document_id="doc-1")
        logger.warn("test msg", extra={"path": "a"})
        data = json.loads(buf.getvalue())
        assert "timestamp" in data
        assert data["logger"] == "mylog"
        assert data["context"] == {"document_id": "doc-1"}
        assert data["extra"] == {"path": "a"}

    def test_text_format_pattern(self) -> None:
        """Text output carries level, logger, context, message and extras."""
        buf = io.StringIO()
        logger = ContextLogger(name="mylog", output_format="text", output=buf).bind(document_id="doc-1")
        logger.warn("hello world", extra={"path": "a"})
        line = buf.getvalue().strip()
        assert "[WARN]" in line
        assert "[mylog]" in line
        assert "[document_id=doc-1]" in line
        assert line.endswith("hello world path=a")

    def test_non_serializable_extras(self) -> None:
        """Non-serializable extras are stringified."""
        buf = io.StringIO()
        logger = ContextLogger(name="test", output=buf)

        class Custom:
            def __str__(self):
                return "custom-obj"

        logger.warn("test", extra={"obj": Custom()})
        data = json.loads(buf.getvalue())
        assert data["extra"]["obj"] == "custom-obj"


class TestContextLoggerBind:
    """Test ContextLogger.bind."""

    def test_bind_returns_new_logger(self) -> None:
        """bind() leaves the original logger untouched."""
        base = ContextLogger(name="test", output=io.StringIO())
        bound = base.bind(source="fitbit")
        assert bound is not base
        assert base._context == {}
        assert bound._context == {"source": "fitbit"}

    def test_bind_merges(self) -> None:
        """Chained bind() calls merge their fields."""
        logger = ContextLogger(name="test", output=io.StringIO()).bind(a=1).bind(b=2)
        assert logger._context == {"a": 1, "b": 2}


class TestContextLoggerRedaction:
    """Test sensitive field redaction."""

    def test_redact_secret_prefix_keys(self) -> None:
        """redact_sensitive=True redacts _secret_ prefixed keys."""
        buf = io.StringIO()
        logger = ContextLogger(name="test", redact_sensitive=True, output=buf)
        logger.warn("test", extra={"_secret_token": "abc", "path": "visible"})
        data = json.loads(buf.getvalue())
        assert data["extra"]["_secret_token"] == "***REDACTED***"
        assert data["extra"]["path"] == "visible"

    def test_no_redaction_when_disabled(self) -> None:
        """redact_sensitive=False does not redact."""
        buf = io.StringIO()
        logger = ContextLogger(name="test", redact_sensitive=False, output=buf)
        logger.warn("test", extra={"_secret_token": "abc"})
        data = json.loads(buf.getvalue())
        assert data["extra"]["_secret_token"] == "abc"


class TestContextLoggerAsSink:
    """Test ContextLogger as the accessor's diagnostic sink."""

    def test_accessor_warnings_are_structured(self) -> None:
        """Accessor warnings become JSON entries with path and node."""
        buf = io.StringIO()
        accessor = NodeAccessor(sink=ContextLogger(name="nodemap.accessors", output=buf))
        assert accessor.get_optional_string(JsonNode({"a": 1}), "b") is None
        data = json.loads(buf.getvalue())
        assert data["level"] == "warn"
        assert data["extra"] == {"path": "b", "node": '{"a":1}'}

    def test_null_writes_nothing(self) -> None:
        """A null field writes no entry."""
        buf = io.StringIO()
        accessor = NodeAccessor(sink=ContextLogger(name="nodemap.accessors", output=buf))
        assert accessor.get_optional_string(JsonNode({"a": None}), "a") is None
        assert buf.getvalue() == ""
