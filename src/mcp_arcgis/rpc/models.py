"""JSON-RPC 2.0 envelope models.

The version field travels as ``protocolVersion`` on the wire. Responses are
encoded by hand in :meth:`JsonRpcResponse.to_wire` because ``id`` must stay
present even when null while unset optionals are dropped.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

PROTOCOL_VERSION = "2.0"


class ErrorCode(IntEnum):
    """Published error code registry. Values are never reused."""

    INVALID_REQUEST = 2000
    METHOD_NOT_FOUND = 2001
    INVALID_PARAMS = 2002
    INTERNAL_ERROR = 2003


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A validated request or notification.

    Whether ``id`` was supplied is tracked through ``model_fields_set``: a
    message without an ``id`` key is a notification, while an explicit
    ``"id": null`` is still a call.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    method: str
    params: Any = None
    id: Any = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class JsonRpcError(BaseModel):
    """A JSON-RPC error object."""

    code: int
    message: str
    data: Any = None

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class JsonRpcResponse(BaseModel):
    """A JSON-RPC response carrying exactly one of ``result`` or ``error``."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    result: Any = None
    error: JsonRpcError | None = None
    id: Any = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> JsonRpcResponse:
        if self.error is not None and self.result is not None:
            msg = "response cannot carry both 'result' and 'error'"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, result: Any, request_id: Any) -> JsonRpcResponse:
        return cls(result=result, id=request_id)

    @classmethod
    def failure(cls, error: JsonRpcError, request_id: Any = None) -> JsonRpcResponse:
        return cls(error=error, id=request_id)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> dict[str, Any]:
        """Return the wire form: version, then result or error, then id."""
        payload: dict[str, Any] = {"protocolVersion": self.protocol_version}
        if self.error is not None:
            payload["error"] = self.error.to_wire()
        else:
            payload["result"] = self.result
        payload["id"] = self.id
        return payload
