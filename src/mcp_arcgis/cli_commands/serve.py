"""``mcp-arcgis serve`` — run the JSON-RPC server on stdin/stdout."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import sys
from typing import TYPE_CHECKING

import click

from mcp_arcgis.cli_commands._output import err_console

if TYPE_CHECKING:
    from mcp_arcgis.config import ServerConfig

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file.",
)
@click.option(
    "--mode",
    type=click.Choice(["eof", "cancel"]),
    default=None,
    help="Stop at end of input (eof) or only when interrupted (cancel).",
)
@click.option("--max-lines", type=click.IntRange(min=1), default=None, help="Stop after N lines.")
@click.option("--log-level", default=None, help="Log level for stderr diagnostics.")
@click.option("--telemetry", is_flag=True, help="Enable tracing (needs the otel extra).")
def serve(
    config_path: str | None,
    mode: str | None,
    max_lines: int | None,
    log_level: str | None,
    telemetry: bool,
) -> None:
    """Serve JSON-RPC requests, one JSON value per line, over stdio."""
    from mcp_arcgis.config import ConfigError, ServerConfig, load_config
    from mcp_arcgis.rpc.server import RunMode
    from mcp_arcgis.utils.logging import configure_logging

    try:
        config = load_config(config_path) if config_path else ServerConfig()
        overrides: dict[str, object] = {}
        if mode is not None:
            overrides["mode"] = RunMode(mode)
        if max_lines is not None:
            overrides["max_lines"] = max_lines
        if log_level is not None:
            overrides["log_level"] = log_level
        if overrides:
            config = ServerConfig.model_validate({**config.model_dump(), **overrides})
    except (ConfigError, ValueError) as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if telemetry:
        config.telemetry.enabled = True

    configure_logging(config.log_level)

    if config.telemetry.enabled:
        from mcp_arcgis.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                export_to_console=config.telemetry.otlp_endpoint is None,
                otlp_endpoint=config.telemetry.otlp_endpoint,
            )
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    logger.info("mcp-arcgis starting (JSON-RPC over stdio, tools/list).")
    asyncio.run(_serve(config))


async def _serve(config: ServerConfig) -> None:
    from mcp_arcgis.core.cancellation import CancellationToken
    from mcp_arcgis.core.mock import MockToolsService
    from mcp_arcgis.rpc.server import JsonRpcServer
    from mcp_arcgis.rpc.transport import StdioTransport

    token = CancellationToken()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on Windows event loops.
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, token.cancel)

    server = JsonRpcServer(
        MockToolsService(),
        mode=config.mode,
        max_lines=config.max_lines,
    )
    transport = StdioTransport(limit=config.max_line_bytes)
    await transport.connect()
    try:
        await server.run(transport, transport, token)
    finally:
        transport.close()
