"""Protocol-level error types.

Each error maps onto one code of :class:`~mcp_arcgis.rpc.models.ErrorCode`
and remembers the id of the request it belongs to, so the boundary that
catches it can build the response without re-reading the input.
"""

from __future__ import annotations

from typing import Any

from mcp_arcgis.rpc.models import ErrorCode, JsonRpcError

INVALID_PAYLOAD_MESSAGE = "Invalid JSON-RPC request payload."
INVALID_OBJECT_MESSAGE = "Invalid request object."
INTERNAL_ERROR_MESSAGE = "Unhandled server error."


class RpcError(Exception):
    """Base error for all failures reported to the client as JSON-RPC errors."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, *, request_id: Any = None, data: Any = None) -> None:
        self.message = message
        self.request_id = request_id
        self.data = data
        super().__init__(message)

    def to_error(self) -> JsonRpcError:
        return JsonRpcError(code=int(self.code), message=self.message, data=self.data)


class InvalidRequestError(RpcError):
    """The line or object is not a well-formed request."""

    code = ErrorCode.INVALID_REQUEST


class MethodNotFoundError(RpcError):
    """No handler is registered under the requested method name."""

    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, method: str, *, request_id: Any = None) -> None:
        self.method = method
        super().__init__(f"Method '{method}' not found.", request_id=request_id)


class InvalidParamsError(RpcError):
    """A handler rejected the shape or content of ``params``."""

    code = ErrorCode.INVALID_PARAMS
