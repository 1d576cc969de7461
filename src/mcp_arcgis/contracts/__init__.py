"""Contracts — tool descriptors and structured error records."""

from mcp_arcgis.contracts.models import (
    SCHEMA_VERSION,
    ErrorContext,
    ErrorResponse,
    ParameterValidation,
    ToolDefinition,
    ToolParameter,
)

__all__ = [
    "SCHEMA_VERSION",
    "ErrorContext",
    "ErrorResponse",
    "ParameterValidation",
    "ToolDefinition",
    "ToolParameter",
]
