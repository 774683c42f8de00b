"""Command group: list, update, and add referrer-spam domains."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from spamctl.commands._base import SpamGroup

if TYPE_CHECKING:
    from spamctl.commands._context import AppContext


@click.group(
    cls=SpamGroup,
    examples="""\
  spamctl domains list
  spamctl domains update
  spamctl domains add spam.example.com""",
)
def domains() -> None:
    """List, update, and add referrer-spam domains."""


@domains.command(
    name="list",
    examples="""\
  spamctl domains list
  spamctl -q domains list""",
)
@click.pass_obj
def list_(app: AppContext) -> None:
    """List the known spam domains (syncing first if no snapshot exists)."""
    app.emit(app.domain_service.list_domains())


@domains.command(
    examples="""\
  spamctl domains update
  spamctl --json domains update""",
)
@click.pass_obj
def update(app: AppContext) -> None:
    """Refresh the domain snapshot from all configured sources."""
    app.emit(app.domain_service.update_domains())


@domains.command(
    examples="""\
  spamctl domains add spam.example.com other-spam.example.org""",
)
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def add(app: AppContext, names: tuple[str, ...]) -> None:
    """Add NAMES to the private domain list (included in the next update)."""
    app.emit(app.domain_service.add_domains(list(names)))
