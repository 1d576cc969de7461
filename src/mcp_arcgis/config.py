"""Server configuration loaded from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from mcp_arcgis.rpc.server import RunMode
from mcp_arcgis.rpc.transport import DEFAULT_LINE_LIMIT

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ConfigError(Exception):
    """Raised when a configuration file fails parsing or validation."""


class TelemetrySettings(BaseModel):
    """Optional tracing configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerConfig(BaseModel):
    """Settings for ``mcp-arcgis serve``."""

    mode: RunMode = RunMode.UNTIL_EOF
    max_lines: int | None = Field(default=None, ge=1)
    max_line_bytes: int = Field(default=DEFAULT_LINE_LIMIT, ge=1024)
    log_level: str = "INFO"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"unknown log level '{value}'"
            raise ValueError(msg)
        return level


def load_config(path: str | Path) -> ServerConfig:
    """Read YAML, interpolate env vars, and validate.

    Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
    using :func:`os.path.expandvars` before YAML parsing. An empty file
    yields the defaults.

    Raises:
        ConfigError: On read errors, YAML parse errors or schema validation failures.
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {p}: {exc}") from exc

    try:
        data: Any = yaml.safe_load(os.path.expandvars(raw))
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration YAML must be a mapping")

    try:
        return ServerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
