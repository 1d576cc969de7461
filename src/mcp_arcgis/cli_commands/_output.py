"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()
# ``serve`` owns stdout for JSON-RPC traffic; its messages go here.
err_console = Console(stderr=True)


def print_tools_table(tools: list[dict[str, Any]]) -> None:
    """Pretty-print tool descriptors (wire form) as a table."""
    table = Table(title="Available Tools")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Inputs")
    table.add_column("Outputs")

    for tool in tools:
        table.add_row(
            tool.get("id", "?"),
            tool.get("name", "?"),
            tool.get("category", ""),
            _param_names(tool.get("inputs", [])),
            _param_names(tool.get("outputs", [])),
        )

    console.print(table)


def print_tools_json(tools: list[dict[str, Any]]) -> None:
    console.print_json(json.dumps(tools))


def _param_names(params: list[dict[str, Any]]) -> str:
    return _truncate(", ".join(p.get("name", "?") for p in params) or "-")


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
