"""Tests for the ``domains`` command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from spamctl.cli import cli


class TestDomainsList:
    def test_first_run_syncs(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "domains", "list"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["referrer-spam.co.uk", "referrer-spam.com"]
        assert (workspace / ".spamctl" / "domains.txt").read_text(encoding="utf-8") == (
            "referrer-spam.co.uk\nreferrer-spam.com\n"
        )

    def test_json(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "domains", "list"])
        assert json.loads(result.stdout)["data"]["count"] == 2


class TestDomainsUpdate:
    def test_reports_diff(self, cli_runner: CliRunner, workspace: Path) -> None:
        cli_runner.invoke(cli, ["domains", "update"])
        (workspace / "blocklist.txt").write_text("referrer-spam.com\nnew-spam.org\n", encoding="utf-8")
        result = cli_runner.invoke(cli, ["--json", "domains", "update"])
        data = json.loads(result.stdout)["data"]
        assert data["statistics"] == {"unchanged": 1, "added": 1, "removed": 1, "total": 3}

    def test_rich_output(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["domains", "update"])
        assert result.exit_code == 0
        assert "+ referrer-spam.com" in result.stdout

    def test_failing_source_keeps_snapshot(self, cli_runner: CliRunner, workspace: Path) -> None:
        cli_runner.invoke(cli, ["domains", "update"])
        snapshot = workspace / ".spamctl" / "domains.txt"
        before = snapshot.read_text(encoding="utf-8")
        (workspace / "blocklist.txt").unlink()

        result = cli_runner.invoke(cli, ["--json", "domains", "update"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "PROVIDER_ERROR"
        assert snapshot.read_text(encoding="utf-8") == before


class TestDomainsAdd:
    def test_added_domain_reaches_snapshot(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["domains", "add", "my-spam.example"])
        assert result.exit_code == 0
        cli_runner.invoke(cli, ["domains", "update"])
        listed = cli_runner.invoke(cli, ["-q", "domains", "list"])
        assert "my-spam.example" in listed.stdout.splitlines()

    def test_duplicate_warns(self, cli_runner: CliRunner, workspace: Path) -> None:
        cli_runner.invoke(cli, ["domains", "add", "my-spam.example"])
        result = cli_runner.invoke(cli, ["domains", "add", "my-spam.example"])
        assert result.exit_code == 0
        assert "Already listed or rejected: my-spam.example" in result.stderr

    def test_requires_names(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["domains", "add"])
        assert result.exit_code == 2
