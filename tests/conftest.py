"""Shared test fixtures for the nodemap test suite."""

from __future__ import annotations

from typing import Any

import pytest

from nodemap.accessors import NodeAccessor
from nodemap.node import JsonNode


class RecordingSink:
    """Diagnostic sink that keeps every warning it receives."""

    def __init__(self) -> None:
        self.warnings: list[tuple[str, dict[str, Any] | None]] = []

    def warn(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self.warnings.append((message, extra))

    @property
    def messages(self) -> list[str]:
        return [message for message, _ in self.warnings]


@pytest.fixture
def sink() -> RecordingSink:
    """Fresh RecordingSink per test."""
    return RecordingSink()


@pytest.fixture
def accessor(sink: RecordingSink) -> NodeAccessor:
    """NodeAccessor that records its warnings in ``sink``."""
    return NodeAccessor(sink=sink)


@pytest.fixture
def document() -> JsonNode:
    """A parent node holding one child of each interesting shape."""
    return JsonNode(
        {
            "name": "steps",
            "count": 42,
            "ratio": 0.5,
            "whole_float": 3.0,
            "flag": True,
            "nothing": None,
            "when": "2023-01-01T00:00:00Z",
            "when_offset": "2023-06-15T08:30:00+02:00",
            "bad_when": "not-a-date",
            "naive_when": "2023-01-01T00:00:00",
            "items": [1, 2, 3],
            "nested": {"inner": "value"},
        }
    )
