"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  It wires the configured collaborators (snapshot
stores, domain sources, filter provider) lazily, so ``--help`` and
``--version`` never touch the filesystem or network.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from spamctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from spamctl.config.settings import SpamSettings
    from spamctl.infrastructure.filter_store import JsonFilterProvider
    from spamctl.services.domains import DomainService, DomainSynchronizer, PrivateDomainList
    from spamctl.services.filters import FilterService
    from spamctl.services.result import ServiceResult


class AppContext:
    """Composition root for one CLI invocation."""

    def __init__(self, settings: SpamSettings) -> None:
        self.settings = settings

        from spamctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from spamctl.services.telemetry import enable_telemetry

            enable_telemetry()

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    @cached_property
    def private_list(self) -> PrivateDomainList:
        from spamctl.infrastructure.snapshot import SnapshotStore
        from spamctl.services.domains import PrivateDomainList

        cfg = self.settings.domains
        store = SnapshotStore(
            self.settings.resolve(cfg.private_path), line_terminator=cfg.line_terminator
        )
        return PrivateDomainList(store)

    @cached_property
    def synchronizer(self) -> DomainSynchronizer:
        from spamctl.infrastructure.snapshot import SnapshotStore
        from spamctl.infrastructure.sources import CompositeDomainProvider, provider_for_source
        from spamctl.services.domains import DomainSynchronizer

        cfg = self.settings.domains
        sources = CompositeDomainProvider(
            [
                provider_for_source(src, base_dir=self.settings.root, timeout=cfg.timeout)
                for src in cfg.sources
            ]
        )
        store = SnapshotStore(
            self.settings.resolve(cfg.snapshot_path), line_terminator=cfg.line_terminator
        )
        return DomainSynchronizer(store, [sources, self.private_list])

    @cached_property
    def filter_provider(self) -> JsonFilterProvider:
        from spamctl.infrastructure.filter_store import JsonFilterProvider

        return JsonFilterProvider(self.settings.resolve(self.settings.provider.path))

    @property
    def domain_service(self) -> DomainService:
        from spamctl.services.domains import DomainService

        return DomainService(self.synchronizer, self.private_list)

    @property
    def filter_service(self) -> FilterService:
        from spamctl.domain.factory import FilterFactory
        from spamctl.domain.naming import FilterNaming
        from spamctl.services.filters import FilterService

        cfg = self.settings.filters
        factory = FilterFactory(
            FilterNaming(cfg.name_prefix),
            max_expression_length=cfg.max_expression_length,
            field=cfg.field,
            sharded=cfg.sharded,
        )
        return FilterService(self.filter_provider, factory, self.synchronizer)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult with correct exit semantics.

        * Success: stdout, normal return; warnings go to stderr unless the
          output is JSON (where they are part of the payload).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
