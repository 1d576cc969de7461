"""JsonRpcServer — the read-one-line / write-one-line loop.

How long the loop runs is decided by the caller through :class:`RunMode`
and an optional line budget, never by the kind of transport it is given.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING

from mcp_arcgis.core.cancellation import CancellationToken
from mcp_arcgis.rpc.batch import BatchCoordinator, encode, invalid_payload
from mcp_arcgis.rpc.dispatcher import MethodDispatcher, internal_error
from mcp_arcgis.rpc.models import JsonRpcResponse
from mcp_arcgis.rpc.transport import LineTooLongError

if TYPE_CHECKING:
    from mcp_arcgis.core.provider import ToolsService
    from mcp_arcgis.rpc.transport import LineReader, LineWriter

logger = logging.getLogger(__name__)


class RunMode(str, Enum):
    """When the server loop stops."""

    UNTIL_EOF = "eof"
    """Stop at end-of-stream or on cancellation, whichever comes first."""

    UNTIL_CANCELLED = "cancel"
    """Keep the process alive after end-of-stream until cancellation."""


class JsonRpcServer:
    """Serves JSON-RPC requests from a :class:`LineReader` to a :class:`LineWriter`.

    Usage::

        server = JsonRpcServer(MockToolsService())
        transport = StdioTransport()
        await transport.connect()
        await server.run(transport, transport, token)

    Lines are handled one at a time; batch elements are dispatched in order.
    A failure while handling one line is reported on that line and never
    stops the loop.
    """

    def __init__(
        self,
        provider: ToolsService | None = None,
        *,
        dispatcher: MethodDispatcher | None = None,
        mode: RunMode = RunMode.UNTIL_EOF,
        max_lines: int | None = None,
    ) -> None:
        if dispatcher is None:
            if provider is None:
                msg = "JsonRpcServer needs a provider or a dispatcher"
                raise ValueError(msg)
            dispatcher = MethodDispatcher.for_provider(provider)
        if max_lines is not None and max_lines < 1:
            msg = f"max_lines must be positive, got {max_lines}"
            raise ValueError(msg)
        self._dispatcher = dispatcher
        self._coordinator = BatchCoordinator(dispatcher)
        self._mode = mode
        self._max_lines = max_lines

    @property
    def dispatcher(self) -> MethodDispatcher:
        return self._dispatcher

    @property
    def mode(self) -> RunMode:
        return self._mode

    async def run(
        self,
        reader: LineReader,
        writer: LineWriter,
        token: CancellationToken | None = None,
    ) -> int:
        """Serve until the run mode says stop. Returns the number of lines handled."""
        token = token or CancellationToken()
        handled = 0
        logger.info("JSON-RPC server loop started (mode=%s).", self._mode.value)

        while not token.cancelled:
            if self._max_lines is not None and handled >= self._max_lines:
                logger.debug("Line budget of %d reached.", self._max_lines)
                break

            try:
                line = await self._next_line(reader, token)
            except LineTooLongError as exc:
                logger.warning("Discarding input line: %s", exc)
                handled += 1
                await writer.write_line(encode(invalid_payload().to_wire()))
                continue

            if line is None:
                if not token.cancelled and self._mode is RunMode.UNTIL_CANCELLED:
                    logger.info("Input closed; waiting for shutdown.")
                    await token.wait()
                break

            if not line.strip():
                continue

            handled += 1
            reply = await self._process_line(line, token)
            if reply is not None:
                await writer.write_line(reply)

        logger.info("JSON-RPC server loop exiting after %d line(s).", handled)
        return handled

    async def _next_line(self, reader: LineReader, token: CancellationToken) -> str | None:
        """Read one line, or return ``None`` on end-of-stream or cancellation."""
        read = asyncio.ensure_future(reader.read_line())
        cancelled = asyncio.ensure_future(token.wait())
        try:
            await asyncio.wait({read, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
        if token.cancelled:
            if not read.done():
                read.cancel()
            elif not read.cancelled() and read.exception() is not None:
                logger.debug("Dropping read failure after cancellation: %r", read.exception())
            return None
        return read.result()

    async def _process_line(self, line: str, token: CancellationToken) -> str | None:
        try:
            return await self._coordinator.handle_line(line, token)
        except Exception:
            logger.exception("Unhandled error while processing an input line.")
            return encode(JsonRpcResponse.failure(internal_error()).to_wire())
