"""MethodDispatcher — routes validated requests to their handlers.

The registry is fixed at construction. Handler failures never escape
:meth:`MethodDispatcher.dispatch`; they become JSON-RPC errors, or no
response at all when the handler stopped because shutdown was requested.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from opentelemetry import trace

from mcp_arcgis.contracts.models import ErrorContext, ErrorResponse
from mcp_arcgis.core.cancellation import OperationCancelledError
from mcp_arcgis.rpc.errors import INTERNAL_ERROR_MESSAGE, MethodNotFoundError, RpcError
from mcp_arcgis.rpc.models import ErrorCode, JsonRpcError, JsonRpcResponse
from mcp_arcgis.utils.telemetry import (
    ATTR_CORRELATION_ID,
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_METHOD,
    ATTR_RPC_NOTIFICATION,
    get_tracer,
)

if TYPE_CHECKING:
    from mcp_arcgis.core.cancellation import CancellationToken
    from mcp_arcgis.core.provider import ToolsService
    from mcp_arcgis.rpc.models import JsonRpcRequest

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

Handler = Callable[[Any, "CancellationToken"], Awaitable[Any]]

TOOLS_LIST = "tools/list"
INTERNAL_ERROR_SUGGESTION = "Check server logs on stderr for details."


class ToolsListHandler:
    """Handles ``tools/list`` by asking the provider for its catalog.

    ``params`` is ignored; the result is the provider's sequence, in order,
    in its camelCase wire form.
    """

    def __init__(self, provider: ToolsService) -> None:
        self._provider = provider

    async def __call__(self, params: Any, token: CancellationToken) -> list[dict[str, Any]]:
        token.raise_if_cancelled()
        tools = await self._provider.list_tools(token)
        return [tool.to_wire() for tool in tools]


def default_handlers(provider: ToolsService) -> dict[str, Handler]:
    """Return the built-in method table bound to *provider*."""
    return {TOOLS_LIST: ToolsListHandler(provider)}


class MethodDispatcher:
    """Maps method names to handlers and turns outcomes into responses.

    Usage::

        dispatcher = MethodDispatcher.for_provider(MockToolsService())
        response = await dispatcher.dispatch(request, token)
    """

    def __init__(self, handlers: Mapping[str, Handler]) -> None:
        self._handlers: Mapping[str, Handler] = MappingProxyType(dict(handlers))

    @classmethod
    def for_provider(cls, provider: ToolsService) -> MethodDispatcher:
        return cls(default_handlers(provider))

    @property
    def methods(self) -> list[str]:
        return sorted(self._handlers)

    async def dispatch(
        self, request: JsonRpcRequest, token: CancellationToken
    ) -> JsonRpcResponse | None:
        """Run the handler for *request*.

        Returns ``None`` for notifications and for calls abandoned because
        *token* was cancelled.
        """
        with _tracer.start_as_current_span("jsonrpc.dispatch") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            span.set_attribute(ATTR_RPC_NOTIFICATION, request.is_notification)

            response = await self._invoke(request, token)

            if response is not None and response.error is not None:
                span.set_attribute(ATTR_RPC_ERROR_CODE, response.error.code)

        if request.is_notification:
            if response is not None and response.error is not None:
                logger.debug(
                    "Dropping error %d for notification %r", response.error.code, request.method
                )
            return None
        return response

    async def _invoke(
        self, request: JsonRpcRequest, token: CancellationToken
    ) -> JsonRpcResponse | None:
        handler = self._handlers.get(request.method)
        if handler is None:
            err = MethodNotFoundError(request.method, request_id=request.id)
            return JsonRpcResponse.failure(err.to_error(), request.id)

        try:
            result = await handler(request.params, token)
        except OperationCancelledError:
            if token.cancelled:
                logger.info("Method %s cancelled during shutdown; not responding.", request.method)
                return None
            return self._internal_error(request)
        except RpcError as exc:
            return JsonRpcResponse.failure(exc.to_error(), request.id)
        except Exception:
            return self._internal_error(request)

        return JsonRpcResponse.success(result, request.id)

    @staticmethod
    def _internal_error(request: JsonRpcRequest) -> JsonRpcResponse:
        correlation_id = uuid.uuid4().hex
        trace.get_current_span().set_attribute(ATTR_CORRELATION_ID, correlation_id)
        logger.exception(
            "Unhandled error processing method %s (correlation id %s).",
            request.method,
            correlation_id,
        )
        return JsonRpcResponse.failure(internal_error(correlation_id), request.id)


def internal_error(correlation_id: str | None = None) -> JsonRpcError:
    """Build the generic, non-leaking internal error object."""
    detail = ErrorResponse(
        code=int(ErrorCode.INTERNAL_ERROR),
        message=INTERNAL_ERROR_MESSAGE,
        data=ErrorContext(correlation_id=correlation_id) if correlation_id else None,
        suggestion=INTERNAL_ERROR_SUGGESTION,
    )
    return JsonRpcError(
        code=int(ErrorCode.INTERNAL_ERROR),
        message=INTERNAL_ERROR_MESSAGE,
        data=detail.to_wire(),
    )
