"""mcp-arcgis — JSON-RPC 2.0 tool discovery engine over line-delimited stdio."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from mcp_arcgis.core.mock import MockToolsService as MockToolsService
    from mcp_arcgis.rpc.server import JsonRpcServer as JsonRpcServer

_LAZY_EXPORTS = {
    "JsonRpcServer": "mcp_arcgis.rpc.server",
    "MockToolsService": "mcp_arcgis.core.mock",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'mcp_arcgis' has no attribute {name!r}")
