"""Update orchestrator: turn reconciliation statuses into provider calls.

UP_TO_DATE is a no-op, OBSOLETE removes by id, OUTDATED updates by id,
NOT_INSTALLED creates.  The first provider error aborts the run; nothing
already applied is rolled back.  Re-running reconciles against the new
remote state and issues only the remaining operations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from spamctl.domain.errors import FilterStateError
from spamctl.domain.filters import FilterStatus
from spamctl.domain.status import FILTER_KINDS, Status
from spamctl.infrastructure.filter_store import FilterProvider

logger = logging.getLogger(__name__)


class ApplyReport(BaseModel):
    """Operations issued by one apply run."""

    created: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    unchanged: list[str] = Field(default_factory=list)

    @property
    def calls(self) -> int:
        return len(self.created) + len(self.updated) + len(self.removed)

    def counts(self) -> dict[str, int]:
        return {
            "created": len(self.created),
            "updated": len(self.updated),
            "removed": len(self.removed),
            "unchanged": len(self.unchanged),
        }


class FilterApplier:
    """Applies a reconciliation result to one account."""

    def __init__(self, provider: FilterProvider) -> None:
        self.provider = provider

    def apply(
        self,
        account_id: str,
        statuses: Iterable[FilterStatus],
        *,
        report: ApplyReport | None = None,
    ) -> ApplyReport:
        """Issue the create/update/remove calls implied by *statuses*.

        Pass *report* to keep the progress made before a failure.

        Raises:
            FilterStateError: A status outside the four reconcilable kinds.
            ProviderError: A provider call failed; earlier calls stay applied.
        """
        report = report if report is not None else ApplyReport()
        for status in statuses:
            name = status.name
            if status.kind not in FILTER_KINDS:
                msg = f"Filter {name!r} has unexpected status {str(status.kind)!r}"
                raise FilterStateError(msg, filter=name, status=str(status.kind))

            if status.kind is Status.UP_TO_DATE:
                report.unchanged.append(name)
            elif status.kind is Status.OBSOLETE:
                self.provider.remove(account_id, self._require_id(status))
                report.removed.append(name)
            elif status.kind is Status.OUTDATED:
                self.provider.update(account_id, self._require_id(status), status.filter)
                report.updated.append(name)
            else:
                self.provider.create(account_id, status.filter)
                report.created.append(name)
        logger.debug("Applied filters to account %s: %s", account_id, report.counts())
        return report

    @staticmethod
    def _require_id(status: FilterStatus) -> str:
        if not status.filter_id:
            msg = f"Filter {status.name!r} is {str(status.kind)!r} but has no remote id"
            raise FilterStateError(msg, filter=status.name, status=str(status.kind))
        return status.filter_id
