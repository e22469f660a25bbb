"""nodemap - Defensive typed accessors for loosely-structured JSON documents."""

from __future__ import annotations

# Nodes
from nodemap.node import MISSING, DocumentNode, JsonNode, MissingSentinel

# Accessors
from nodemap.accessors import (
    NodeAccessor,
    get_optional_double,
    get_optional_long,
    get_optional_offset_datetime,
    get_optional_string,
    get_optional_value,
    get_required_child,
    get_required_long,
    get_required_string,
    get_required_value,
    parse_offset_datetime,
)

# Diagnostics
from nodemap.diagnostics import ContextLogger, DiagnosticSink, LoggingSink

# Config
from nodemap.config import AccessorSettings, Config

# Errors
from nodemap.errors import (
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    IncompatibleTypeError,
    MissingFieldError,
    NodeMappingError,
)

__version__ = "0.1.0"

__all__ = [
    # Nodes
    "DocumentNode",
    "JsonNode",
    "MissingSentinel",
    "MISSING",
    # Accessors
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
    # Diagnostics
    "DiagnosticSink",
    "LoggingSink",
    "ContextLogger",
    # Config
    "Config",
    "AccessorSettings",
    # Errors
    "ErrorCodes",
    "NodeMappingError",
    "MissingFieldError",
    "IncompatibleTypeError",
    "ConfigError",
    "ConfigNotFoundError",
]
