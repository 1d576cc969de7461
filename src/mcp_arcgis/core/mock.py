"""MockToolsService — a fixed catalog used until real toolbox discovery lands."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from mcp_arcgis.contracts.models import SCHEMA_VERSION, ToolDefinition, ToolParameter

if TYPE_CHECKING:
    from mcp_arcgis.core.cancellation import CancellationToken

logger = logging.getLogger(__name__)

MOCK_TOOL_ID = "mock-buffer-model"


class MockToolsService:
    """Returns one hard-coded buffer model.

    Satisfies the :class:`~mcp_arcgis.core.provider.ToolsService` protocol.
    The descriptor is built once, so repeated calls return identical data.
    """

    def __init__(self, *, last_modified: datetime | None = None) -> None:
        self._tools = (
            ToolDefinition(
                schema_version=SCHEMA_VERSION,
                id=MOCK_TOOL_ID,
                name="Mock Buffer Model",
                path="C:/mock/Buffer.tbx",
                category="Mock/Geometry",
                description="A mock buffer model used for JSON-RPC plumbing tests.",
                last_modified=last_modified or datetime.now(UTC),
                dependencies=["Buffer"],
                inputs=[
                    ToolParameter(
                        name="InputFeatures",
                        display_name="Input Features",
                        data_type="feature_layer",
                        is_required=True,
                    )
                ],
                outputs=[
                    ToolParameter(
                        name="OutputFeatures",
                        display_name="Output Features",
                        data_type="feature_layer",
                        is_required=True,
                    )
                ],
            ),
        )

    async def list_tools(self, token: CancellationToken) -> list[ToolDefinition]:
        token.raise_if_cancelled()
        logger.debug("Listing %d mock tool(s)", len(self._tools))
        return list(self._tools)
