"""BatchCoordinator — turns one input line into at most one output line.

A line holding a JSON array is a batch: every element goes through
validation and dispatch on its own, strictly in order, and the non-empty
responses are written back as one array. Anything else is a single
request.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from mcp_arcgis.rpc.errors import INVALID_PAYLOAD_MESSAGE, InvalidRequestError
from mcp_arcgis.rpc.models import JsonRpcResponse
from mcp_arcgis.rpc.validator import validate_request

if TYPE_CHECKING:
    from mcp_arcgis.core.cancellation import CancellationToken
    from mcp_arcgis.rpc.dispatcher import MethodDispatcher

logger = logging.getLogger(__name__)


def encode(payload: Any) -> str:
    """Serialize *payload* as one compact JSON line (no trailing newline).

    Strings that cannot be written as UTF-8 (lone surrogates from ``\\ud800``
    escapes in the input) force an ASCII-escaped line instead.
    """
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return json.dumps(payload, ensure_ascii=True, separators=(",", ":"), allow_nan=False)
    return text


class BatchCoordinator:
    """Parses a line, fans batches out to the dispatcher, and encodes the reply."""

    def __init__(self, dispatcher: MethodDispatcher) -> None:
        self._dispatcher = dispatcher

    async def handle_line(self, line: str, token: CancellationToken) -> str | None:
        """Process one non-blank line and return the encoded reply, if any."""
        try:
            value = json.loads(line, parse_constant=_reject_constant)
        except (ValueError, RecursionError):
            logger.warning("Failed to parse JSON-RPC input line.", exc_info=True)
            return encode(invalid_payload().to_wire())

        if isinstance(value, list):
            return await self._handle_batch(value, token)

        response = await self.handle_value(value, token)
        return encode(response.to_wire()) if response is not None else None

    async def handle_value(self, value: Any, token: CancellationToken) -> JsonRpcResponse | None:
        """Validate and dispatch one parsed request value."""
        try:
            request = validate_request(value)
        except InvalidRequestError as exc:
            logger.debug("Rejected request: %s", exc.message)
            return JsonRpcResponse.failure(exc.to_error(), exc.request_id)
        return await self._dispatcher.dispatch(request, token)

    async def _handle_batch(self, items: list[Any], token: CancellationToken) -> str:
        responses: list[dict[str, Any]] = []
        for item in items:
            response = await self.handle_value(item, token)
            if response is not None:
                responses.append(response.to_wire())
        logger.debug("Batch of %d produced %d response(s)", len(items), len(responses))
        return encode(responses)


def _reject_constant(name: str) -> Any:
    msg = f"non-standard JSON constant: {name}"
    raise ValueError(msg)


def invalid_payload() -> JsonRpcResponse:
    """The reply for a line that is not usable as a request at all."""
    return JsonRpcResponse.failure(InvalidRequestError(INVALID_PAYLOAD_MESSAGE).to_error())
