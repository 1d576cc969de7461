"""Line transports — where the server loop reads requests and writes replies.

Each transport satisfies :class:`LineReader` and :class:`LineWriter`. The
server loop only ever sees these two protocols, so a live stdio pipe and an
in-memory buffer behave the same apart from the buffer reaching its end.
"""

from __future__ import annotations

import asyncio
import io
import logging
import sys
from typing import IO, TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

DEFAULT_LINE_LIMIT = 16 * 1024 * 1024


class TransportError(Exception):
    """Base error for transport failures."""


class LineTooLongError(TransportError):
    """An input line exceeded the transport's size limit and was discarded."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Input line exceeds {limit} bytes")


@runtime_checkable
class LineReader(Protocol):
    """Source of newline-delimited text."""

    async def read_line(self) -> str | None:
        """Return the next line without its terminator, or ``None`` at end-of-stream."""
        ...


@runtime_checkable
class LineWriter(Protocol):
    """Sink for newline-delimited text."""

    async def write_line(self, line: str) -> None:
        """Write *line* plus a newline and flush it."""
        ...


def _strip_terminator(line: str) -> str:
    return line.rstrip("\r\n")


class StdioTransport:
    """Reads UTF-8 lines from stdin and writes them to stdout.

    Pipes and terminals are read through an :class:`asyncio.StreamReader`;
    a regular file redirected onto stdin is read directly since the event
    loop cannot watch it.
    """

    def __init__(
        self,
        stdin: IO[bytes] | None = None,
        stdout: IO[bytes] | None = None,
        *,
        limit: int = DEFAULT_LINE_LIMIT,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin.buffer
        self._stdout = stdout if stdout is not None else sys.stdout.buffer
        self._limit = limit
        self._reader: asyncio.StreamReader | None = None
        self._pipe: asyncio.ReadTransport | None = None
        self._direct = False

    async def connect(self) -> None:
        """Attach stdin to the running event loop."""
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=self._limit)
        protocol = asyncio.StreamReaderProtocol(reader)
        try:
            self._pipe, _ = await loop.connect_read_pipe(lambda: protocol, self._stdin)
        except (ValueError, NotImplementedError):
            logger.debug("stdin is not a pipe; reading it directly.")
            self._direct = True
            return
        self._reader = reader

    def close(self) -> None:
        """Detach stdin from the event loop. Safe to call more than once."""
        if self._pipe is not None:
            self._pipe.close()
            self._pipe = None
        self._reader = None

    async def read_line(self) -> str | None:
        if self._direct:
            raw = self._stdin.readline(self._limit + 1)
            if len(raw) > self._limit and not raw.endswith(b"\n"):
                self._stdin.readline()
                raise LineTooLongError(self._limit)
        else:
            if self._reader is None:
                msg = "Transport not connected"
                raise RuntimeError(msg)
            try:
                raw = await self._reader.readline()
            except ValueError as exc:
                raise LineTooLongError(self._limit) from exc
        if not raw:
            return None
        return _strip_terminator(raw.decode("utf-8", errors="replace"))

    async def write_line(self, line: str) -> None:
        self._stdout.write(line.encode("utf-8") + b"\n")
        self._stdout.flush()


class MemoryTransport:
    """A finite in-memory transport.

    Input is consumed line by line; every written line is kept in
    :attr:`written`.

    Usage::

        transport = MemoryTransport('{"protocolVersion":"2.0","id":1,"method":"tools/list"}\\n')
        await server.run(transport, transport)
        replies = transport.written
    """

    def __init__(self, source: str | Iterable[str] = "") -> None:
        text = source if isinstance(source, str) else "\n".join(source)
        self._input = io.StringIO(text)
        self.written: list[str] = []

    async def read_line(self) -> str | None:
        raw = self._input.readline()
        if not raw:
            return None
        return _strip_terminator(raw)

    async def write_line(self, line: str) -> None:
        self.written.append(line)

    def getvalue(self) -> str:
        """Return everything written so far as newline-terminated text."""
        return "".join(f"{line}\n" for line in self.written)
