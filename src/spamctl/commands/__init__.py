"""Subcommand modules for spamctl.

register_commands() uses deferred imports to keep ``spamctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``filters`` and ``domains`` groups on the root CLI group."""
    from spamctl.commands.domains import domains
    from spamctl.commands.filters import filters

    cli.add_command(filters)
    cli.add_command(domains)
