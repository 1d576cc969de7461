"""Tests for the protocol error hierarchy."""

from mcp_arcgis.rpc.errors import (
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    RpcError,
)
from mcp_arcgis.rpc.models import ErrorCode


class TestErrorHierarchy:
    def test_all_are_rpc_errors(self) -> None:
        for cls in (InvalidRequestError, MethodNotFoundError, InvalidParamsError):
            assert issubclass(cls, RpcError)

    def test_codes(self) -> None:
        assert InvalidRequestError.code is ErrorCode.INVALID_REQUEST
        assert MethodNotFoundError.code is ErrorCode.METHOD_NOT_FOUND
        assert InvalidParamsError.code is ErrorCode.INVALID_PARAMS


class TestMethodNotFoundError:
    def test_message_and_id(self) -> None:
        err = MethodNotFoundError("tools/nonexistent", request_id=2)
        assert err.method == "tools/nonexistent"
        assert err.request_id == 2
        assert str(err) == "Method 'tools/nonexistent' not found."


class TestToError:
    def test_converts_to_plain_int_code(self) -> None:
        error = InvalidParamsError("params must be an object", data={"parameterName": "x"})
        wire = error.to_error().to_wire()
        assert wire == {
            "code": 2002,
            "message": "params must be an object",
            "data": {"parameterName": "x"},
        }
        assert type(wire["code"]) is int
