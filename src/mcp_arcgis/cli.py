"""mcp-arcgis CLI entrypoint."""

from __future__ import annotations

import click

from mcp_arcgis import __version__


@click.group()
@click.version_option(version=__version__, prog_name="mcp-arcgis")
def main() -> None:
    """mcp-arcgis — JSON-RPC tool discovery server."""


# Register subcommands
from mcp_arcgis.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
