"""Cooperative cancellation shared by the server loop and handlers."""

from __future__ import annotations

import asyncio


class OperationCancelledError(Exception):
    """Raised by a handler or provider that observed a cancellation request."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Operation cancelled" + (f": {detail}" if detail else ""))


class CancellationToken:
    """A one-shot shutdown signal.

    The server loop checks it before reading each line; handlers receive it
    and call :meth:`raise_if_cancelled` (or await :meth:`wait`) to stop early.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    async def wait(self) -> None:
        """Block until cancellation is requested."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError
