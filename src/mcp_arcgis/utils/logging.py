"""Diagnostic logging setup.

stdout carries nothing but JSON-RPC responses, so every log record goes to
a stderr-bound rich console.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "mcp_arcgis.stderr"


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> logging.Handler:
    """Attach a stderr :class:`RichHandler` to the root logger.

    Calling it again replaces the previously installed handler instead of
    stacking a second one.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    return handler
