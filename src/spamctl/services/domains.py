"""Domain list synchronization: community snapshot and private list.

Pipeline for ``update_domains``: FETCH (all sources) → DIFF (against the
previous snapshot) → REPLACE (snapshot written wholesale) → RESPOND.

INVARIANT: A failing source aborts the sync before the snapshot is
touched.  A missing snapshot is "no prior state", never an error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from spamctl.domain.domains import (
    DomainSyncResult,
    check_domain_names,
    diff_domains,
    normalize_domains,
)
from spamctl.domain.errors import NoDomainsError, SnapshotMissingError, SpamControlError
from spamctl.infrastructure.snapshot import SnapshotStore
from spamctl.infrastructure.sources import DomainProvider
from spamctl.services.base import BaseService
from spamctl.services.result import ServiceError, ServiceResult
from spamctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class Reviewer(Protocol):
    """Approves or rejects candidate spam domains before they are stored."""

    def review(self, candidates: Sequence[str]) -> list[str]: ...


def sync_domains(
    previous: Iterable[str],
    providers: Sequence[DomainProvider],
) -> DomainSyncResult:
    """Fetch every provider, merge, and diff against *previous*.

    Sources that succeed with no names yield an empty snapshot, so every
    previous name is reported as removed.

    Raises:
        ProviderError: Any provider failed; nothing is returned.
    """
    fetched: list[str] = []
    for provider in providers:
        fetched.extend(provider.fetch())
    return diff_domains(previous, fetched)


class DomainSynchronizer:
    """Owns the community domain snapshot."""

    def __init__(self, store: SnapshotStore, providers: Sequence[DomainProvider]) -> None:
        self.store = store
        self.providers = list(providers)

    def previous(self) -> list[str]:
        """The stored snapshot, or an empty list when there is no prior state."""
        try:
            return self.store.read()
        except (SnapshotMissingError, NoDomainsError) as exc:
            logger.debug("No previous domain snapshot: %s", exc.message)
            return []

    def sync(self) -> DomainSyncResult:
        """Fetch, diff, and replace the snapshot."""
        result = sync_domains(self.previous(), self.providers)
        self.store.write(result.snapshot)
        logger.info(
            "Domain snapshot updated: %d added, %d removed, %d unchanged",
            len(result.added),
            len(result.removed),
            len(result.unchanged),
        )
        return result

    def read(self) -> list[str]:
        """The current snapshot; runs a first-time sync if none exists.

        Raises:
            NoDomainsError: Neither the snapshot nor a fresh sync yields names.
        """
        try:
            return self.store.read()
        except (SnapshotMissingError, NoDomainsError):
            logger.debug("Snapshot unavailable, running first-time sync")
        domains = list(self.sync().snapshot)
        if not domains:
            msg = "No domains found"
            raise NoDomainsError(msg, path=str(self.store.path))
        return domains


class PrivateDomainList:
    """User-maintained domain list; also a :class:`DomainProvider`.

    A missing file simply means the list is empty.
    """

    def __init__(self, store: SnapshotStore, *, reviewer: Reviewer | None = None) -> None:
        self.store = store
        self.reviewer = reviewer

    def fetch(self) -> list[str]:
        if not self.store.exists():
            return []
        try:
            return self.store.read()
        except NoDomainsError:
            return []

    def add(self, domain_names: Iterable[str]) -> list[str]:
        """Store *domain_names* (after review); return the newly added ones.

        Raises:
            DomainNameError: A candidate is blank.
        """
        candidates = normalize_domains(check_domain_names(domain_names))
        approved = self.reviewer.review(candidates) if self.reviewer else candidates
        existing = self.fetch()
        added = sorted(set(approved) - set(existing))
        if added:
            self.store.write(normalize_domains([*existing, *approved]))
        return added

    def __repr__(self) -> str:
        return f"PrivateDomainList({str(self.store.path)!r})"


class DomainService(BaseService):
    """ServiceResult-returning operations on the domain lists."""

    def __init__(
        self,
        synchronizer: DomainSynchronizer,
        private_list: PrivateDomainList | None = None,
    ) -> None:
        self._sync = synchronizer
        self._private = private_list

    @traced
    def update_domains(self) -> ServiceResult:
        """Refresh the snapshot from all sources and report the diff."""
        op = "update_domains"
        try:
            with trace_span("sync"):
                result = self._sync.sync()
        except SpamControlError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "statistics": result.statistics,
                "domains": result.changes(),
            },
        )

    @traced
    def list_domains(self) -> ServiceResult:
        """Return the known spam domains (first-time sync if needed)."""
        op = "list_domains"
        try:
            domains = self._sync.read()
        except SpamControlError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"count": len(domains), "items": domains})

    @traced
    def add_domains(self, domain_names: Sequence[str]) -> ServiceResult:
        """Add domains to the private list."""
        op = "add_domains"
        if self._private is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NO_PRIVATE_LIST",
                    message="No private domain list configured",
                ),
            )
        try:
            added = self._private.add(domain_names)
        except SpamControlError as exc:
            return self._failure(op, exc)

        warnings: list[str] = []
        skipped = sorted(set(normalize_domains(domain_names)) - set(added))
        if skipped:
            warnings.append(f"Already listed or rejected: {', '.join(skipped)}")
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(added), "items": added},
            warnings=warnings,
        )

