"""Tests for the --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from spamctl.cli import cli

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["filters", "--examples"], ["spamctl filters status", "spamctl filters global"]),
    (["filters", "status", "--examples"], ["spamctl -q filters status"]),
    (["filters", "update", "--examples"], ["spamctl --json filters update"]),
    (["filters", "remove", "--examples"], ["spamctl filters remove"]),
    (["filters", "global", "--examples"], ["--all"]),
    (["domains", "--examples"], ["spamctl domains add"]),
    (["domains", "list", "--examples"], ["spamctl -q domains list"]),
    (["domains", "update", "--examples"], ["spamctl domains update"]),
    (["domains", "add", "--examples"], ["other-spam.example.org"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_examples_not_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["filters", "status", "--help"])
    assert "spamctl -q filters status" not in result.output
    assert "--examples" in result.output
    assert "Print sample invocations and exit." in result.output
