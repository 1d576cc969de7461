"""Core layer — capability providers and cancellation."""

from mcp_arcgis.core.cancellation import CancellationToken, OperationCancelledError
from mcp_arcgis.core.mock import MOCK_TOOL_ID, MockToolsService
from mcp_arcgis.core.provider import ToolsService

__all__ = [
    "MOCK_TOOL_ID",
    "CancellationToken",
    "MockToolsService",
    "OperationCancelledError",
    "ToolsService",
]
