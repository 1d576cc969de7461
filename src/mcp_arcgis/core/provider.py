"""ToolsService protocol — the capability provider consumed by the server.

Any object with an async ``list_tools(token)`` method satisfies it, so the
JSON-RPC layer never depends on where tool descriptors come from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mcp_arcgis.contracts.models import ToolDefinition
    from mcp_arcgis.core.cancellation import CancellationToken


@runtime_checkable
class ToolsService(Protocol):
    """Lists the tools available to clients."""

    async def list_tools(self, token: CancellationToken) -> Sequence[ToolDefinition]:
        """Return the available tools in a stable order.

        Implementations may be slow or fail; they should raise
        :class:`~mcp_arcgis.core.cancellation.OperationCancelledError` when
        they observe *token* being cancelled.
        """
        ...
