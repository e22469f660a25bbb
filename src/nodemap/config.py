"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nodemap.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "AccessorSettings"]


class Config:
    """Configuration accessor with dot-path key support."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file whose root is a mapping."""
        file_path = Path(path)
        if not file_path.exists():
            raise ConfigNotFoundError(config_path=str(file_path))

        try:
            data = yaml.safe_load(file_path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file '{file_path}': {e}", cause=e) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(message=f"Config file '{file_path}' is not a mapping")
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


class AccessorSettings(BaseModel):
    """Settings read from the ``nodemap`` section of a Config."""

    model_config = ConfigDict(extra="forbid")

    render_max_length: int | None = Field(default=None, ge=1)
    sink: Literal["logging", "context"] = "logging"
    log_format: Literal["json", "text"] = "json"
    log_level: Literal["trace", "debug", "info", "warn", "error", "fatal"] = "info"

    @classmethod
    def from_config(cls, config: Config) -> AccessorSettings:
        section = config.get("nodemap", {})
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise ConfigError(message="The 'nodemap' config section must be a mapping")
        try:
            return cls.model_validate(section)
        except ValidationError as e:
            raise ConfigError(message=f"Invalid nodemap settings: {e}", cause=e) from e
