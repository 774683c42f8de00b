"""Command group: show, update, and remove managed spam filters."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from spamctl.commands._base import SpamGroup
from spamctl.config.logging import bind_log_context

if TYPE_CHECKING:
    from spamctl.commands._context import AppContext


@click.group(
    cls=SpamGroup,
    examples="""\
  spamctl filters status 12345678
  spamctl --json filters status 12345678
  spamctl filters update 12345678
  spamctl filters remove 12345678
  spamctl filters global 12345678 87654321""",
)
def filters() -> None:
    """Show, update, and remove managed spam filters."""


@filters.command(
    examples="""\
  spamctl filters status 12345678
  spamctl -q filters status 12345678""",
)
@click.argument("account_id")
@click.pass_obj
def status(app: AppContext, account_id: str) -> None:
    """Reconcile ACCOUNT_ID's filters and report their status."""
    bind_log_context(account_id=account_id)
    app.emit(app.filter_service.status(account_id))


@filters.command(
    examples="""\
  spamctl filters update 12345678
  spamctl --json filters update 12345678""",
)
@click.argument("account_id")
@click.pass_obj
def update(app: AppContext, account_id: str) -> None:
    """Create, update, and remove filters so ACCOUNT_ID matches the domain list."""
    bind_log_context(account_id=account_id)
    app.emit(app.filter_service.update(account_id))


@filters.command(
    examples="""\
  spamctl filters remove 12345678""",
)
@click.argument("account_id")
@click.confirmation_option(prompt="Remove all managed spam filters?")
@click.pass_obj
def remove(app: AppContext, account_id: str) -> None:
    """Remove every managed spam filter from ACCOUNT_ID."""
    bind_log_context(account_id=account_id)
    app.emit(app.filter_service.remove(account_id))


@filters.command(
    name="global",
    examples="""\
  spamctl filters global 12345678 87654321
  spamctl filters global --all""",
)
@click.argument("account_ids", nargs=-1)
@click.option("--all", "all_accounts", is_flag=True, help="Every account in the filter store.")
@click.pass_obj
def global_(app: AppContext, account_ids: tuple[str, ...], all_accounts: bool) -> None:
    """Summarize the status of several accounts by majority vote."""
    ids = list(account_ids)
    if all_accounts:
        ids.extend(a for a in app.filter_provider.list_accounts() if a not in ids)
    if not ids:
        click.echo("No accounts given. Pass ACCOUNT_IDS or --all.", err=True)
        raise SystemExit(1)
    app.emit(app.filter_service.global_status(ids))
