"""Tests for ``mcp-arcgis serve`` CLI command."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner

from mcp_arcgis.cli import main

if TYPE_CHECKING:
    from pathlib import Path

_LIST = '{"protocolVersion":"2.0","id":%d,"method":"tools/list"}\n'


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _replies(stdout: str) -> list[Any]:
    return [json.loads(line) for line in stdout.splitlines() if line[:1] in ("{", "[")]


class TestServeCommand:
    def test_serves_until_eof(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["serve", "--log-level", "ERROR"],
            input=_LIST % 1 + "\n{bad\n" + _LIST % 2,
        )

        assert result.exit_code == 0, result.output
        replies = _replies(result.stdout)
        assert [r["id"] for r in replies] == [1, None, 2]
        assert replies[1]["error"]["code"] == 2000

    def test_max_lines(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["serve", "--log-level", "ERROR", "--max-lines", "1"],
            input=_LIST % 1 + _LIST % 2,
        )

        assert result.exit_code == 0, result.output
        assert [r["id"] for r in _replies(result.stdout)] == [1]

    def test_config_file(self, tmp_path: Path) -> None:
        f = tmp_path / "server.yaml"
        f.write_text("max_lines: 1\nlog_level: error\n")

        runner = CliRunner()
        result = runner.invoke(
            main, ["serve", "--config", str(f)], input=_LIST % 7 + _LIST % 8
        )

        assert result.exit_code == 0, result.output
        assert [r["id"] for r in _replies(result.stdout)] == [7]

    def test_invalid_config(self, tmp_path: Path) -> None:
        f = tmp_path / "bad.yaml"
        f.write_text("mode: sometimes\n")

        runner = CliRunner()
        result = runner.invoke(main, ["serve", "--config", str(f)], input="")

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_invalid_log_level(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "--log-level", "chatty"], input="")

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_rejects_zero_max_lines(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "--max-lines", "0"], input="")

        assert result.exit_code != 0
