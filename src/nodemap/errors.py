"""Error hierarchy for nodemap."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "NodeMappingError",
    "MissingFieldError",
    "IncompatibleTypeError",
    "ConfigNotFoundError",
    "ConfigError",
    "ErrorCodes",
]


class NodeMappingError(Exception):
    """Base error for all nodemap errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class MissingFieldError(NodeMappingError):
    """Raised when a required field is absent or explicitly null."""

    def __init__(self, path: str, node: str, **kwargs: Any) -> None:
        super().__init__(
            code="FIELD_MISSING",
            message=f"A '{path}' field wasn't found in node '{node}'.",
            details={"path": path, "node": node},
            **kwargs,
        )

    @property
    def path(self) -> str:
        """The key that was looked up."""
        return self.details["path"]

    @property
    def node(self) -> str:
        """Rendering of the parent node."""
        return self.details["node"]


class IncompatibleTypeError(NodeMappingError):
    """Raised when a required field is present but has the wrong type."""

    def __init__(self, path: str, node: str, **kwargs: Any) -> None:
        super().__init__(
            code="FIELD_INCOMPATIBLE",
            message=f"The '{path}' field in node '{node}' isn't compatible.",
            details={"path": path, "node": node},
            **kwargs,
        )

    @property
    def path(self) -> str:
        """The key that was looked up."""
        return self.details["path"]

    @property
    def node(self) -> str:
        """Rendering of the parent node."""
        return self.details["node"]


class ConfigNotFoundError(NodeMappingError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(NodeMappingError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class ErrorCodes:
    """All nodemap error codes as constants.

    Example:
        if error.code == ErrorCodes.FIELD_MISSING:
            skip_document()
    """

    FIELD_MISSING = "FIELD_MISSING"
    FIELD_INCOMPATIBLE = "FIELD_INCOMPATIBLE"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
