"""Tests for line transports."""

import asyncio
import io
import os

import pytest

from mcp_arcgis.rpc.transport import (
    LineReader,
    LineTooLongError,
    LineWriter,
    MemoryTransport,
    StdioTransport,
)


class TestTransportProtocols:
    def test_memory_satisfies_protocols(self) -> None:
        transport = MemoryTransport()
        assert isinstance(transport, LineReader)
        assert isinstance(transport, LineWriter)

    def test_stdio_satisfies_protocols(self) -> None:
        transport = StdioTransport(io.BytesIO(), io.BytesIO())
        assert isinstance(transport, LineReader)
        assert isinstance(transport, LineWriter)


class TestMemoryTransport:
    async def test_reads_lines_then_eof(self) -> None:
        transport = MemoryTransport("a\r\nb\n\nc")
        assert await transport.read_line() == "a"
        assert await transport.read_line() == "b"
        assert await transport.read_line() == ""
        assert await transport.read_line() == "c"
        assert await transport.read_line() is None

    async def test_accepts_iterable(self) -> None:
        transport = MemoryTransport(["x", "y"])
        assert await transport.read_line() == "x"
        assert await transport.read_line() == "y"
        assert await transport.read_line() is None

    async def test_collects_output(self) -> None:
        transport = MemoryTransport()
        await transport.write_line("one")
        await transport.write_line("two")
        assert transport.written == ["one", "two"]
        assert transport.getvalue() == "one\ntwo\n"


class TestStdioTransportDirect:
    async def test_regular_stream_read_directly(self) -> None:
        transport = StdioTransport(io.BytesIO(b'{"a":1}\r\n\xff\n'), io.BytesIO())
        await transport.connect()
        assert await transport.read_line() == '{"a":1}'
        assert await transport.read_line() == "\ufffd"
        assert await transport.read_line() is None

    async def test_long_line_discarded(self) -> None:
        data = b"x" * 2000 + b"\nok\n"
        transport = StdioTransport(io.BytesIO(data), io.BytesIO(), limit=1024)
        await transport.connect()
        with pytest.raises(LineTooLongError) as info:
            await transport.read_line()
        assert info.value.limit == 1024
        assert await transport.read_line() == "ok"

    async def test_write_line_flushes(self) -> None:
        out = io.BytesIO()
        transport = StdioTransport(io.BytesIO(), out)
        await transport.write_line('{"id":"é"}')
        assert out.getvalue() == '{"id":"é"}\n'.encode()


class TestStdioTransportPipe:
    async def test_reads_from_pipe(self) -> None:
        read_fd, write_fd = os.pipe()
        with os.fdopen(read_fd, "rb", buffering=0) as stdin:
            os.write(write_fd, b"first\nsecond\n")
            os.close(write_fd)

            transport = StdioTransport(stdin, io.BytesIO())
            await transport.connect()
            assert await transport.read_line() == "first"
            assert await transport.read_line() == "second"
            assert await transport.read_line() is None

    async def test_read_before_connect_raises(self) -> None:
        transport = StdioTransport(io.BytesIO(), io.BytesIO())
        with pytest.raises(RuntimeError, match="not connected"):
            await transport.read_line()

    async def test_close_detaches_pipe(self) -> None:
        read_fd, write_fd = os.pipe()
        with os.fdopen(read_fd, "rb", buffering=0) as stdin:
            os.close(write_fd)
            transport = StdioTransport(stdin, io.BytesIO())
            await transport.connect()
            transport.close()
            transport.close()
            await asyncio.sleep(0)
            with pytest.raises(RuntimeError, match="not connected"):
                await transport.read_line()

    def test_close_before_connect_is_noop(self) -> None:
        stdin = io.BytesIO(b"line\n")
        StdioTransport(stdin, io.BytesIO()).close()
        assert not stdin.closed
