"""Filter status: one closed enum for per-filter kinds and global summaries.

Per-filter reconciliation only ever yields UP_TO_DATE, OUTDATED,
NOT_INSTALLED, or OBSOLETE.  NOT_SET and UNKNOWN appear only as results of
aggregation.  Members are totally ordered by declaration rank so that
aggregated output is deterministic.
"""

from __future__ import annotations

from enum import StrEnum


class Status(StrEnum):
    """Spam-filter status."""

    NOT_SET = "not-set"
    UP_TO_DATE = "up-to-date"
    OUTDATED = "outdated"
    NOT_INSTALLED = "not-installed"
    OBSOLETE = "obsolete"
    UNKNOWN = "unknown"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank >= other.rank


_RANK: dict[Status, int] = {status: index for index, status in enumerate(Status)}

# Kinds the reconciler can produce (and the orchestrator accepts).
FILTER_KINDS: frozenset[Status] = frozenset(
    {Status.UP_TO_DATE, Status.OUTDATED, Status.NOT_INSTALLED, Status.OBSOLETE}
)
