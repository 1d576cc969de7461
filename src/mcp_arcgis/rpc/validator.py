"""Request validation — turns a parsed JSON value into a request.

Rules are applied in order and stop at the first failure:

1. the value must be a JSON object (``id`` is then unknown, so ``null``);
2. ``protocolVersion`` must be exactly ``"2.0"``;
3. ``method`` must be a non-blank string.

``params`` is never inspected here; handlers own its shape.
"""

from __future__ import annotations

from typing import Any

from mcp_arcgis.rpc.errors import INVALID_OBJECT_MESSAGE, InvalidRequestError
from mcp_arcgis.rpc.models import PROTOCOL_VERSION, JsonRpcRequest


def validate_request(value: Any) -> JsonRpcRequest:
    """Validate *value* and return the request it encodes.

    Raises:
        InvalidRequestError: If any structural rule fails. The error's
            ``request_id`` is the echoed ``id`` when one could be read.
    """
    if not isinstance(value, dict):
        raise InvalidRequestError(INVALID_OBJECT_MESSAGE)

    request_id = value.get("id")

    version = value.get("protocolVersion")
    if not isinstance(version, str) or version != PROTOCOL_VERSION:
        raise InvalidRequestError(
            f"protocolVersion must be '{PROTOCOL_VERSION}'.", request_id=request_id
        )

    method = value.get("method")
    if not isinstance(method, str) or not method.strip():
        raise InvalidRequestError("Missing method.", request_id=request_id)

    fields: dict[str, Any] = {"protocol_version": version, "method": method}
    if "params" in value:
        fields["params"] = value["params"]
    if "id" in value:
        fields["id"] = request_id
    return JsonRpcRequest(**fields)
