"""JSON-RPC layer — validation, dispatch, batching, transports and the server loop."""

from mcp_arcgis.rpc.batch import BatchCoordinator
from mcp_arcgis.rpc.dispatcher import MethodDispatcher, ToolsListHandler
from mcp_arcgis.rpc.errors import (
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    RpcError,
)
from mcp_arcgis.rpc.models import (
    PROTOCOL_VERSION,
    ErrorCode,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
)
from mcp_arcgis.rpc.server import JsonRpcServer, RunMode
from mcp_arcgis.rpc.transport import (
    LineReader,
    LineTooLongError,
    LineWriter,
    MemoryTransport,
    StdioTransport,
    TransportError,
)
from mcp_arcgis.rpc.validator import validate_request

__all__ = [
    "PROTOCOL_VERSION",
    "BatchCoordinator",
    "ErrorCode",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonRpcServer",
    "LineReader",
    "LineTooLongError",
    "LineWriter",
    "MemoryTransport",
    "MethodDispatcher",
    "MethodNotFoundError",
    "RpcError",
    "RunMode",
    "StdioTransport",
    "ToolsListHandler",
    "TransportError",
    "validate_request",
]
