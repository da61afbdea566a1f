"""
Pydantic configuration schemas.

A logger or a whole registry can be described in YAML:

    default_name: app
    loggers:
      app:
        template: "{date|%H:%M:%S} {name}.{level} {message}"
        fatal_on: EMERGENCY
        destinations:
          - {target: stderr, level: WARNING}
          - {target: logs/app.log, level: DEBUG}
      audit:
        panic_on_file_errors: false
        destinations:
          - {target: logs/audit.log, level: [NOTICE, ERROR]}

Usage:
    config = RegistryConfig.from_yaml("logging.yaml")
    registry.configure(config)
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from xlog.errors import InvalidLevelError
from xlog.levels import resolve_level

if TYPE_CHECKING:
    from xlog.core import Logger

LevelSpec = Union[int, str, list[Union[int, str]]]


def _check_level(value: Any) -> Any:
    """Reject unknown level names at load time instead of at append time."""
    if value is None:
        return value
    try:
        resolve_level(value)
    except InvalidLevelError as exc:
        raise ValueError(str(exc)) from exc
    return value


class _YamlModel(BaseModel):
    @classmethod
    def from_yaml(cls, path: str | Path):
        """Load and validate from a YAML file."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate(yaml.safe_load(raw) or {})

    @classmethod
    def from_yaml_string(cls, yaml_string: str):
        """Load and validate from a YAML string."""
        return cls.model_validate(yaml.safe_load(yaml_string) or {})

    @classmethod
    def from_dict(cls, data: dict):
        """Load and validate from a dict."""
        return cls.model_validate(data)

    def to_dict(self, exclude_none: bool = True) -> dict:
        return self.model_dump(exclude_none=exclude_none)


class DestinationConfig(_YamlModel):
    target: str
    level: LevelSpec = "DEBUG"

    @field_validator("level")
    @classmethod
    def _validate_level(cls, v: Any) -> Any:
        return _check_level(v)


class LoggerConfig(_YamlModel):
    name: Optional[str] = None
    enabled: Optional[bool] = None
    template: Optional[str] = None
    date_format: Optional[str] = None
    fatal_on: Optional[LevelSpec] = None
    panic_on: Optional[LevelSpec] = None
    panic_on_file_errors: Optional[bool] = None
    destinations: list[DestinationConfig] = Field(default_factory=list)

    @field_validator("fatal_on", "panic_on")
    @classmethod
    def _validate_masks(cls, v: Any) -> Any:
        return _check_level(v)

    def build(self, name: Optional[str] = None) -> "Logger":
        """Create a new Logger from this config."""
        from xlog.core import Logger

        logger_name = name or self.name
        if not logger_name:
            raise ValueError("LoggerConfig.build() needs a name")
        logger = Logger(logger_name)
        logger.configure(self)
        return logger


class RegistryConfig(_YamlModel):
    default_name: Optional[str] = None
    loggers: dict[str, LoggerConfig] = Field(default_factory=dict)
