"""Status aggregation: installation ratio, domain coverage, global status."""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import Iterable, Sequence

from spamctl.domain.filters import DomainCoverage, FilterSpec, FilterStatus, InstallationStatus
from spamctl.domain.status import Status


def installation_status(statuses: Iterable[FilterStatus]) -> InstallationStatus:
    """Count how many filters are UP_TO_DATE out of all reconciled filters."""
    total = 0
    up_to_date = 0
    for status in statuses:
        total += 1
        if status.kind is Status.UP_TO_DATE:
            up_to_date += 1
    return InstallationStatus(total=total, up_to_date=up_to_date)


def domain_coverage(filters: Iterable[FilterSpec], domain_names: Sequence[str]) -> DomainCoverage:
    """Count the domain names matched by at least one filter expression."""
    covered: set[str] = set()
    for spec in filters:
        details = spec.exclude_details
        flags = 0 if details.case_sensitive else re.IGNORECASE
        try:
            pattern = re.compile(details.expression_value, flags)
        except re.error:
            continue
        covered.update(name for name in domain_names if pattern.search(name))
    return DomainCoverage(total_domains=len(set(domain_names)), domains_covered=len(covered))


def majority_threshold(count: int) -> int:
    """Occurrences a status needs to win the vote among *count* statuses.

    ``ceil(count / 2)``, plus one when *count* is even and divisible by
    that value, so an exact half never counts as a majority.

    Examples:
        >>> [majority_threshold(n) for n in range(1, 9)]
        [1, 2, 2, 3, 3, 4, 4, 5]
    """
    threshold = math.ceil(count / 2)
    if count % 2 == 0 and threshold and count % threshold == 0:
        threshold += 1
    return threshold


def majority_status(statuses: Sequence[Status]) -> Status | None:
    """Return the status reaching :func:`majority_threshold`, or None."""
    if not statuses:
        return None
    threshold = majority_threshold(len(statuses))
    counts = Counter(statuses)
    for status in sorted(counts):
        if counts[status] >= threshold:
            return status
    return None


def calculate_global_status(statuses: Iterable[Status]) -> Status:
    """Reduce many statuses to one by majority vote.

    Empty input and an even split both give UNKNOWN.
    """
    items = list(statuses)
    if not items:
        return Status.UNKNOWN
    first = items[0]
    if all(status is first for status in items):
        return first
    majority = majority_status(items)
    return majority if majority is not None else Status.UNKNOWN
