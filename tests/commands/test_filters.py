"""Tests for the ``filters`` command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from spamctl.cli import cli
from tests.conftest import PREFIX

ACCOUNT = "12345678"
FILTER_NAME = f"{PREFIX} Segment R #001"


def _json(runner: CliRunner, *args: str) -> dict:
    result = runner.invoke(cli, ["--json", *args])
    return json.loads(result.stdout)


class TestFiltersStatus:
    def test_fresh_account(self, cli_runner: CliRunner, workspace: Path) -> None:
        data = _json(cli_runner, "filters", "status", ACCOUNT)
        assert data["ok"] is True
        assert data["data"]["status"] == "not-installed"
        assert data["data"]["filters"] == [
            {"name": FILTER_NAME, "id": None, "status": "not-installed"}
        ]
        # The first run syncs the domain snapshot.
        assert (workspace / ".spamctl" / "domains.txt").is_file()

    def test_rich_output(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["filters", "status", ACCOUNT])
        assert result.exit_code == 0
        assert FILTER_NAME in result.stdout
        assert "not-installed" in result.stdout

    def test_quiet_output(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "filters", "status", ACCOUNT])
        assert result.stdout.strip() == f"{FILTER_NAME}\tnot-installed"


class TestFiltersUpdate:
    def test_update_then_up_to_date(self, cli_runner: CliRunner, workspace: Path) -> None:
        first = _json(cli_runner, "filters", "update", ACCOUNT)
        assert first["data"]["created"] == 1

        second = _json(cli_runner, "filters", "update", ACCOUNT)
        assert second["data"]["created"] == 0
        assert second["data"]["unchanged"] == 1

        status = _json(cli_runner, "filters", "status", ACCOUNT)
        assert status["data"]["status"] == "up-to-date"
        assert status["data"]["coverage"]["percent"] == 100

    def test_new_domain_outdates_filter(self, cli_runner: CliRunner, workspace: Path) -> None:
        cli_runner.invoke(cli, ["filters", "update", ACCOUNT])
        with (workspace / "blocklist.txt").open("a", encoding="utf-8") as fh:
            fh.write("referrer-spam.net\n")
        cli_runner.invoke(cli, ["domains", "update"])

        status = _json(cli_runner, "filters", "status", ACCOUNT)
        assert status["data"]["status"] == "outdated"
        update = _json(cli_runner, "filters", "update", ACCOUNT)
        assert update["data"]["updated"] == 1

    def test_source_failure(self, cli_runner: CliRunner, workspace: Path) -> None:
        (workspace / "blocklist.txt").unlink()
        result = cli_runner.invoke(cli, ["filters", "update", ACCOUNT])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
        assert not (workspace / ".spamctl" / "filters.json").exists()


class TestFiltersRemove:
    def test_remove_with_yes(self, cli_runner: CliRunner, workspace: Path) -> None:
        cli_runner.invoke(cli, ["filters", "update", ACCOUNT])
        data = _json(cli_runner, "filters", "remove", ACCOUNT, "--yes")
        assert data["data"]["removed"] == 1
        assert data["data"]["items"] == [FILTER_NAME]

    def test_remove_requires_confirmation(self, cli_runner: CliRunner, workspace: Path) -> None:
        cli_runner.invoke(cli, ["filters", "update", ACCOUNT])
        result = cli_runner.invoke(cli, ["filters", "remove", ACCOUNT], input="n\n")
        assert result.exit_code == 1
        status = _json(cli_runner, "filters", "status", ACCOUNT)
        assert status["data"]["status"] == "up-to-date"


class TestFiltersGlobal:
    def test_named_accounts(self, cli_runner: CliRunner, workspace: Path) -> None:
        cli_runner.invoke(cli, ["filters", "update", "1"])
        cli_runner.invoke(cli, ["filters", "update", "2"])
        data = _json(cli_runner, "filters", "global", "1", "2", "3")
        assert data["data"]["status"] == "up-to-date"
        assert [a["status"] for a in data["data"]["accounts"]] == [
            "up-to-date",
            "up-to-date",
            "not-installed",
        ]

    def test_all_accounts(self, cli_runner: CliRunner, workspace: Path) -> None:
        cli_runner.invoke(cli, ["filters", "update", "1"])
        data = _json(cli_runner, "filters", "global", "--all")
        assert [a["account_id"] for a in data["data"]["accounts"]] == ["1"]

    def test_no_accounts(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["filters", "global"])
        assert result.exit_code == 1
        assert "No accounts given" in result.stderr
