"""Contract records shared between the JSON-RPC layer and tool providers.

All records serialize with camelCase keys (``schemaVersion``,
``lastModified``, ...) and accept either the Python field name or the
camelCase alias on input.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = "1.0.0"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# Tool descriptors
# ---------------------------------------------------------------------------


class ParameterValidation(_CamelModel):
    """Optional constraints attached to a tool parameter."""

    min: float | None = None
    max: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    enum: list[Any] | None = None
    business_rule_description: str | None = None


class ToolParameter(_CamelModel):
    """A single input or output parameter of a tool."""

    name: str
    display_name: str
    data_type: str
    is_required: bool = False
    default_value: Any = None
    validation: ParameterValidation | None = None


class ToolDefinition(_CamelModel):
    """A discoverable tool as returned by ``tools/list``."""

    schema_version: str = SCHEMA_VERSION
    id: str
    name: str
    path: str
    category: str
    description: str = ""
    last_modified: datetime
    dependencies: list[str] = Field(default_factory=list)
    inputs: list[ToolParameter] = Field(default_factory=list)
    outputs: list[ToolParameter] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready camelCase form, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Structured error detail
# ---------------------------------------------------------------------------


class ErrorContext(_CamelModel):
    """Contextual detail attached to an :class:`ErrorResponse`."""

    tool_id: str | None = None
    tool_name: str | None = None
    parameter_name: str | None = None
    expected_format: str | None = None
    file_path: str | None = None
    system_state: str | None = None
    correlation_id: str | None = None


class ErrorResponse(_CamelModel):
    """Client-facing error detail carried in a JSON-RPC ``error.data`` field.

    Never holds raw exception text; ``suggestion`` and ``recovery`` are
    written for the client, and ``data.correlation_id`` points at the
    matching server-side log entry.
    """

    code: int
    message: str
    data: ErrorContext | None = None
    suggestion: str | None = None
    recovery: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
