"""Document node abstraction and its JSON implementation."""

from __future__ import annotations

import json
from typing import Any, Final, Protocol, runtime_checkable

__all__ = ["DocumentNode", "JsonNode", "MissingSentinel", "MISSING"]


class MissingSentinel:
    """Marks the value of a node that does not exist.

    Use the MISSING instance and compare with ``is``. It is distinct from
    ``None``, which is a JSON null.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"


MISSING: Final[MissingSentinel] = MissingSentinel()


@runtime_checkable
class DocumentNode(Protocol):
    """Read-only capabilities the accessors need from a tree node."""

    def is_missing(self) -> bool: ...

    def is_null(self) -> bool: ...

    def is_textual(self) -> bool: ...

    def is_integral_number(self) -> bool: ...

    def is_number(self) -> bool: ...

    def text_value(self) -> str | None: ...

    def long_value(self) -> int: ...

    def double_value(self) -> float: ...

    def path(self, key: str) -> DocumentNode: ...

    def render(self) -> str: ...


class JsonNode:
    """Immutable node over an already-decoded JSON value.

    Child lookup never raises: a key that is absent, or a lookup on anything
    other than an object, yields the missing node.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_json(cls, text: str | bytes) -> JsonNode:
        """Decode a JSON document and wrap its root."""
        return cls(json.loads(text))

    @classmethod
    def missing(cls) -> JsonNode:
        return _MISSING_NODE

    @property
    def value(self) -> Any:
        """The wrapped value, or MISSING."""
        return self._value

    # --- type tests ---

    def is_missing(self) -> bool:
        return self._value is MISSING

    def is_null(self) -> bool:
        return self._value is None

    def is_textual(self) -> bool:
        return isinstance(self._value, str)

    def is_integral_number(self) -> bool:
        # bool is an int subclass but a JSON boolean, not a number
        return isinstance(self._value, int) and not isinstance(self._value, bool)

    def is_number(self) -> bool:
        return isinstance(self._value, (int, float)) and not isinstance(self._value, bool)

    # --- scalar values ---

    def text_value(self) -> str | None:
        return self._value if self.is_textual() else None

    def long_value(self) -> int:
        if self.is_number():
            return int(self._value)
        return 0

    def double_value(self) -> float:
        if self.is_number():
            return float(self._value)
        return 0.0

    # --- navigation ---

    def path(self, key: str) -> JsonNode:
        if isinstance(self._value, dict) and key in self._value:
            return JsonNode(self._value[key])
        return _MISSING_NODE

    def render(self) -> str:
        """Compact JSON text; the missing node renders as an empty string."""
        if self.is_missing():
            return ""
        return json.dumps(self._value, separators=(",", ":"), ensure_ascii=False, default=str)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonNode):
            return NotImplemented
        if self.is_missing() or other.is_missing():
            return self.is_missing() and other.is_missing()
        return type(self._value) is type(other._value) and self._value == other._value

    def __hash__(self) -> int:
        if self.is_missing():
            return hash(MISSING)
        return hash(json.dumps(self._value, sort_keys=True, default=str))

    def __repr__(self) -> str:
        if self.is_missing():
            return "JsonNode(<MISSING>)"
        return f"JsonNode({self.render()})"

    def __str__(self) -> str:
        return self.render()


_MISSING_NODE: Final[JsonNode] = JsonNode(MISSING)
