"""``mcp-arcgis tools`` — inspect the tools the server would advertise."""

from __future__ import annotations

import asyncio

import click

from mcp_arcgis.cli_commands._output import console, print_tools_json, print_tools_table


@click.group()
def tools() -> None:
    """Inspect available tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the raw tools/list result.")
def list_tools(as_json: bool) -> None:
    """List the tools returned by ``tools/list``."""
    from mcp_arcgis.core.cancellation import CancellationToken
    from mcp_arcgis.core.mock import MockToolsService
    from mcp_arcgis.rpc.dispatcher import ToolsListHandler

    handler = ToolsListHandler(MockToolsService())

    try:
        tool_list = asyncio.run(handler(None, CancellationToken()))
    except Exception as exc:
        console.print(f"[red]Discovery error:[/red] {exc}")
        raise SystemExit(1) from exc

    if as_json:
        print_tools_json(tool_list)
        return

    if not tool_list:
        console.print("[yellow]No tools available.[/yellow]")
        return

    print_tools_table(tool_list)
