"""FilterService: status, update, and removal of managed filters.

Pipeline for ``update``: READ (managed filters + domain snapshot) →
GENERATE (desired filters) → RECONCILE → APPLY → RESPOND.

INVARIANT: Filters whose name is not managed by the naming scheme are
never read into reconciliation, updated, or removed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from spamctl.domain.aggregate import calculate_global_status, domain_coverage, installation_status
from spamctl.domain.errors import SpamControlError
from spamctl.domain.factory import FilterFactory
from spamctl.domain.filters import ExistingFilter, FilterStatus
from spamctl.domain.naming import FilterNaming
from spamctl.domain.reconcile import reconcile
from spamctl.infrastructure.filter_store import FilterProvider
from spamctl.services.apply import ApplyReport, FilterApplier
from spamctl.services.base import BaseService
from spamctl.services.domains import DomainSynchronizer
from spamctl.services.result import ServiceResult
from spamctl.services.telemetry import get_current_span, trace_span, traced

logger = logging.getLogger(__name__)


def list_managed(
    provider: FilterProvider,
    account_id: str,
    naming: FilterNaming,
) -> list[ExistingFilter]:
    """The account's filters that belong to the naming scheme."""
    return [f for f in provider.list_filters(account_id) if naming.is_managed(f.name)]


class FilterService(BaseService):
    """Reconciles one account's managed filters with the domain snapshot."""

    def __init__(
        self,
        provider: FilterProvider,
        factory: FilterFactory,
        domains: DomainSynchronizer,
    ) -> None:
        self._provider = provider
        self._factory = factory
        self._domains = domains

    @property
    def naming(self) -> FilterNaming:
        return self._factory.naming

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def status(self, account_id: str) -> ServiceResult:
        """Reconcile without applying; report per-filter and summary status."""
        op = "filter_status"
        try:
            existing, domain_names, statuses = self._reconcile(account_id)
        except SpamControlError as exc:
            return self._failure(op, exc, account_id=account_id)

        installation = installation_status(statuses)
        coverage = domain_coverage(existing, domain_names)
        overall = calculate_global_status(s.kind for s in statuses)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "account_id": account_id,
                "status": str(overall),
                "filters": [s.to_dict() for s in statuses],
                "installation": {
                    "total": installation.total,
                    "up_to_date": installation.up_to_date,
                    "percent": installation.percent,
                },
                "coverage": {
                    "total_domains": coverage.total_domains,
                    "domains_covered": coverage.domains_covered,
                    "percent": coverage.percent,
                },
            },
        )

    @traced
    def update(self, account_id: str) -> ServiceResult:
        """Create, update, and remove filters until the account converges."""
        op = "update_filters"
        report = ApplyReport()
        try:
            _, _, statuses = self._reconcile(account_id)
            with trace_span("apply"):
                FilterApplier(self._provider).apply(account_id, statuses, report=report)
        except SpamControlError as exc:
            return self._failure(op, exc, account_id=account_id, **report.counts())

        self._annotate(report)
        return ServiceResult(
            ok=True,
            op=op,
            data={"account_id": account_id, **report.counts(), "changes": _changes(report)},
        )

    @traced
    def remove(self, account_id: str) -> ServiceResult:
        """Remove every managed filter from the account."""
        op = "remove_filters"
        report = ApplyReport()
        try:
            existing = list_managed(self._provider, account_id, self.naming)
            statuses = reconcile(existing, [])
            FilterApplier(self._provider).apply(account_id, statuses, report=report)
        except SpamControlError as exc:
            return self._failure(op, exc, account_id=account_id, removed=len(report.removed))

        self._annotate(report)
        return ServiceResult(
            ok=True,
            op=op,
            data={"account_id": account_id, "removed": len(report.removed), "items": report.removed},
        )

    @traced
    def global_status(self, account_ids: Sequence[str]) -> ServiceResult:
        """Majority-vote status over several accounts."""
        op = "global_status"
        accounts: list[dict[str, Any]] = []
        try:
            for account_id in account_ids:
                _, _, statuses = self._reconcile(account_id)
                installation = installation_status(statuses)
                accounts.append(
                    {
                        "account_id": account_id,
                        "status": calculate_global_status(s.kind for s in statuses),
                        "percent": installation.percent,
                    }
                )
        except SpamControlError as exc:
            return self._failure(op, exc)

        overall = calculate_global_status(a["status"] for a in accounts)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "status": str(overall),
                "accounts": [{**a, "status": str(a["status"])} for a in accounts],
            },
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reconcile(
        self, account_id: str
    ) -> tuple[list[ExistingFilter], list[str], list[FilterStatus]]:
        with trace_span("read"):
            existing = list_managed(self._provider, account_id, self.naming)
            domain_names = self._domains.read()
        with trace_span("generate"):
            desired = self._factory.build(domain_names)
        with trace_span("reconcile"):
            statuses = reconcile(existing, desired)
        logger.debug(
            "Reconciled account %s: %d existing, %d desired, %d statuses",
            account_id,
            len(existing),
            len(desired),
            len(statuses),
        )
        return existing, domain_names, statuses

    @staticmethod
    def _annotate(report: ApplyReport) -> None:
        span = get_current_span()
        if span is not None:
            span.annotate("provider_calls", report.calls)


def _changes(report: ApplyReport) -> list[dict[str, str]]:
    rows = [{"name": n, "action": "created"} for n in report.created]
    rows.extend({"name": n, "action": "updated"} for n in report.updated)
    rows.extend({"name": n, "action": "removed"} for n in report.removed)
    return sorted(rows, key=lambda row: row["name"])
