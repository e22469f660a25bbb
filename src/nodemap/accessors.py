"""Safe, typed field extraction from document nodes.

Two families of accessors read a direct child of a parent node:

* ``get_required_*`` raise ``MissingFieldError`` when the child is absent or
  null and ``IncompatibleTypeError`` when it has the wrong type. Nothing is
  logged; the caller decides how to report the failure.
* ``get_optional_*`` return ``None`` instead. A missing child or a type
  mismatch is reported as a warning to the diagnostic sink; an explicit null
  is an expected absence and is not reported.

The module-level functions use a shared default accessor that logs through
the ``nodemap.accessors`` stdlib logger.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Callable, TypeVar

from nodemap.config import AccessorSettings, Config
from nodemap.diagnostics import ContextLogger, DiagnosticSink, LoggingSink
from nodemap.errors import IncompatibleTypeError, MissingFieldError
from nodemap.node import DocumentNode

__all__ = [
    "NodeAccessor",
    "get_required_child",
    "get_required_value",
    "get_required_string",
    "get_required_long",
    "get_optional_value",
    "get_optional_string",
    "get_optional_double",
    "get_optional_long",
    "get_optional_offset_datetime",
    "parse_offset_datetime",
]

T = TypeVar("T")

TypeCheck = Callable[[DocumentNode], bool]
Converter = Callable[[DocumentNode], T]


def _is_textual(node: DocumentNode) -> bool:
    return node.is_textual()


def _is_integral_number(node: DocumentNode) -> bool:
    return node.is_integral_number()


def _is_number(node: DocumentNode) -> bool:
    return node.is_number()


def _text_value(node: DocumentNode) -> str:
    text = node.text_value()
    return text if text is not None else ""


def _long_value(node: DocumentNode) -> int:
    return node.long_value()


def _double_value(node: DocumentNode) -> float:
    return node.double_value()


# Extended ISO-8601 date-time with a mandatory offset. Seconds are optional and
# may carry up to nine fraction digits.
_OFFSET_DATETIME = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,9}))?)?([Zz]|[+-]\d{2}:\d{2}(?::\d{2})?)",
    re.ASCII,
)


def parse_offset_datetime(text: str) -> datetime:
    """Parse an extended ISO-8601 date-time that carries a UTC offset.

    Accepts ``YYYY-MM-DDTHH:MM[:SS[.fraction]]`` followed by ``Z`` or
    ``+HH:MM[:SS]``. Fractions beyond microseconds are truncated.

    Raises:
        ValueError: If the text is not in that form or names an invalid date or time.
    """
    match = _OFFSET_DATETIME.fullmatch(text)
    if match is None:
        raise ValueError(f"'{text}' is not an ISO-8601 date-time with a UTC offset")

    date, hour, minute, second, fraction, offset = match.groups()
    micros = (fraction or "").ljust(6, "0")[:6]
    if offset in ("Z", "z"):
        offset = "+00:00"
    return datetime.fromisoformat(f"{date}T{hour}:{minute}:{second or '00'}.{micros}{offset}")


class NodeAccessor:
    """Extracts typed values from the direct children of a parent node.

    Holds no per-call state and is safe to share between threads.
    """

    def __init__(self, sink: DiagnosticSink | None = None, render_max_length: int | None = None) -> None:
        self._sink: DiagnosticSink = sink if sink is not None else LoggingSink()
        self._render_max_length = render_max_length

    @classmethod
    def from_config(cls, config: Config) -> NodeAccessor:
        """Build an accessor from the ``nodemap`` section of a Config."""
        settings = AccessorSettings.from_config(config)
        sink: DiagnosticSink
        if settings.sink == "context":
            sink = ContextLogger(
                name="nodemap.accessors",
                output_format=settings.log_format,
                level=settings.log_level,
            )
        else:
            sink = LoggingSink()
        return cls(sink=sink, render_max_length=settings.render_max_length)

    @property
    def sink(self) -> DiagnosticSink:
        return self._sink

    def _render(self, node: DocumentNode) -> str:
        rendered = node.render()
        limit = self._render_max_length
        if limit is not None and len(rendered) > limit:
            return rendered[:limit] + "..."
        return rendered

    # --- required family ---

    def get_required_child(self, parent: DocumentNode, path: str) -> DocumentNode:
        """Return the child at ``path``.

        Raises:
            MissingFieldError: If the child is absent or null.
        """
        child = parent.path(path)
        if child.is_missing() or child.is_null():
            raise MissingFieldError(path=path, node=self._render(parent))
        return child

    def get_required_value(self, parent: DocumentNode, path: str, type_check: TypeCheck, convert: Converter[T]) -> T:
        """Return ``convert(child)`` once ``type_check(child)`` has passed.

        Raises:
            MissingFieldError: If the child is absent or null.
            IncompatibleTypeError: If ``type_check`` rejects the child.
        """
        child = self.get_required_child(parent, path)
        if not type_check(child):
            raise IncompatibleTypeError(path=path, node=self._render(parent))
        return convert(child)

    def get_required_string(self, parent: DocumentNode, path: str) -> str:
        return self.get_required_value(parent, path, _is_textual, _text_value)

    def get_required_long(self, parent: DocumentNode, path: str) -> int:
        return self.get_required_value(parent, path, _is_integral_number, _long_value)

    # --- optional family ---

    def get_optional_value(
        self, parent: DocumentNode, path: str, type_check: TypeCheck, convert: Converter[T]
    ) -> T | None:
        """Return ``convert(child)``, or None when the child is unusable.

        A missing child and a type mismatch each emit one warning. A null
        child returns None without a warning.
        """
        child = parent.path(path)

        if child.is_missing():
            rendered = self._render(parent)
            self._sink.warn(
                f"A '{path}' field wasn't found in node '{rendered}'.",
                extra={"path": path, "node": rendered},
            )
            return None

        if child.is_null():
            return None

        if not type_check(child):
            rendered = self._render(parent)
            self._sink.warn(
                f"The '{path}' field in node '{rendered}' isn't compatible.",
                extra={"path": path, "node": rendered},
            )
            return None

        return convert(child)

    def get_optional_string(self, parent: DocumentNode, path: str) -> str | None:
        return self.get_optional_value(parent, path, _is_textual, _text_value)

    def get_optional_double(self, parent: DocumentNode, path: str) -> float | None:
        return self.get_optional_value(parent, path, _is_number, _double_value)

    def get_optional_long(self, parent: DocumentNode, path: str) -> int | None:
        return self.get_optional_value(parent, path, _is_integral_number, _long_value)

    def get_optional_offset_datetime(self, parent: DocumentNode, path: str) -> datetime | None:
        """Return the child parsed as an offset date-time, or None.

        An unparseable string is reported as a warning, never raised.
        """
        text = self.get_optional_string(parent, path)
        if text is None:
            return None

        try:
            return parse_offset_datetime(text)
        except ValueError as e:
            rendered = self._render(parent)
            self._sink.warn(
                f"The '{path}' field in node '{rendered}' with value '{text}' isn't a valid timestamp.",
                extra={"path": path, "node": rendered, "value": text, "error": str(e)},
            )
            return None


_default_accessor = NodeAccessor()

get_required_child = _default_accessor.get_required_child
get_required_value = _default_accessor.get_required_value
get_required_string = _default_accessor.get_required_string
get_required_long = _default_accessor.get_required_long
get_optional_value = _default_accessor.get_optional_value
get_optional_string = _default_accessor.get_optional_string
get_optional_double = _default_accessor.get_optional_double
get_optional_long = _default_accessor.get_optional_long
get_optional_offset_datetime = _default_accessor.get_optional_offset_datetime
