"""Shared pytest fixtures and test helpers for spamctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from spamctl.domain.errors import ProviderError
from spamctl.domain.filters import ExistingFilter, FilterDetails, FilterSpec

PREFIX = "ga-spam-control"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SPAMCTL_* variables from the developer's shell out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("SPAMCTL_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """`-v` runs enable span collection for the whole thread; switch it back off."""
    yield
    from spamctl.services.telemetry import disable_telemetry

    disable_telemetry()


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """CLI runs point the root handler at CliRunner's stderr; put it back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temp working directory with a config file and a local block-list.

    The only domain source is ``blocklist.txt``, so no test reaches the
    network.
    """
    (tmp_path / "blocklist.txt").write_text(
        "referrer-spam.com\nreferrer-spam.co.uk\n", encoding="utf-8"
    )
    (tmp_path / "spamctl.toml").write_text(
        '[domains]\nsources = ["blocklist.txt"]\nline_terminator = "\\n"\n'
        f'[filters]\nname_prefix = "{PREFIX}"\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Test doubles and helpers
# ---------------------------------------------------------------------------


def make_spec(name: str, expression: str, **details: object) -> FilterSpec:
    return FilterSpec(
        name=name,
        exclude_details=FilterDetails(expression_value=expression, **details),
    )


def make_existing(name: str, expression: str, filter_id: str, **details: object) -> ExistingFilter:
    return ExistingFilter(
        name=name,
        id=filter_id,
        exclude_details=FilterDetails(expression_value=expression, **details),
    )


class StaticDomainProvider:
    """DomainProvider returning a fixed list, or raising ProviderError."""

    def __init__(self, domains: list[str] | None = None, *, error: str | None = None) -> None:
        self.domains = domains or []
        self.error = error
        self.fetch_count = 0

    def fetch(self) -> list[str]:
        self.fetch_count += 1
        if self.error:
            raise ProviderError(self.error)
        return list(self.domains)


class RecordingFilterProvider:
    """In-memory FilterProvider that records every mutating call.

    ``fail_on`` names an operation (``"create"``, ``"update"``, ``"remove"``)
    that raises ProviderError after ``fail_after`` successful calls of it.
    """

    def __init__(
        self,
        filters: dict[str, list[ExistingFilter]] | None = None,
        *,
        fail_on: str | None = None,
        fail_after: int = 0,
    ) -> None:
        self.accounts = {k: list(v) for k, v in (filters or {}).items()}
        self.calls: list[tuple[str, str, str]] = []
        self.fail_on = fail_on
        self.fail_after = fail_after
        self._next_id = 100

    def list_filters(self, account_id: str) -> list[ExistingFilter]:
        return list(self.accounts.get(account_id, []))

    def create(self, account_id: str, spec: FilterSpec) -> ExistingFilter:
        self._record("create", account_id, spec.name)
        self._next_id += 1
        created = ExistingFilter(**spec.spec().model_dump(), id=str(self._next_id))
        self.accounts.setdefault(account_id, []).append(created)
        return created

    def update(self, account_id: str, filter_id: str, spec: FilterSpec) -> ExistingFilter:
        self._record("update", account_id, filter_id)
        items = self.accounts[account_id]
        index = next(i for i, f in enumerate(items) if f.id == filter_id)
        items[index] = ExistingFilter(**spec.spec().model_dump(), id=filter_id)
        return items[index]

    def remove(self, account_id: str, filter_id: str) -> None:
        self._record("remove", account_id, filter_id)
        self.accounts[account_id] = [f for f in self.accounts[account_id] if f.id != filter_id]

    def _record(self, op: str, account_id: str, target: str) -> None:
        if op == self.fail_on:
            done = sum(1 for call in self.calls if call[0] == op)
            if done >= self.fail_after:
                raise ProviderError(f"{op} failed for {target}")
        self.calls.append((op, account_id, target))
