"""Filter reconciler: classify every filter name into a status.

Join existing (managed) filters with desired filters on ``name``:

============  ============  =================  =============
existing      desired       content            status
============  ============  =================  =============
yes           yes           equal              UP_TO_DATE
yes           yes           differs            OUTDATED
yes           no            -                  OBSOLETE
no            yes           -                  NOT_INSTALLED
============  ============  =================  =============

OUTDATED carries the desired content with the existing filter's id, so
the remote object is updated in place.  Output is sorted by name.
"""

from __future__ import annotations

from collections.abc import Iterable

from spamctl.domain.filters import ExistingFilter, FilterSpec, FilterStatus
from spamctl.domain.status import Status


def reconcile(
    existing: Iterable[ExistingFilter],
    desired: Iterable[FilterSpec],
) -> list[FilterStatus]:
    """Compare *existing* against *desired* and return one status per filter.

    If the provider holds several filters with the same managed name, the
    first joins with the desired filter and the extra copies are OBSOLETE.
    """
    existing_by_name: dict[str, ExistingFilter] = {}
    statuses: list[FilterStatus] = []

    for current in existing:
        if current.name in existing_by_name:
            statuses.append(
                FilterStatus(filter=current.spec(), kind=Status.OBSOLETE, filter_id=current.id)
            )
            continue
        existing_by_name[current.name] = current

    desired_names: set[str] = set()
    for wanted in desired:
        desired_names.add(wanted.name)
        match = existing_by_name.get(wanted.name)
        if match is None:
            statuses.append(FilterStatus(filter=wanted.spec(), kind=Status.NOT_INSTALLED))
        elif match.same_content(wanted):
            statuses.append(
                FilterStatus(filter=wanted.spec(), kind=Status.UP_TO_DATE, filter_id=match.id)
            )
        else:
            statuses.append(
                FilterStatus(filter=wanted.spec(), kind=Status.OUTDATED, filter_id=match.id)
            )

    for name, current in existing_by_name.items():
        if name not in desired_names:
            statuses.append(
                FilterStatus(filter=current.spec(), kind=Status.OBSOLETE, filter_id=current.id)
            )

    return sorted(statuses, key=lambda s: (s.name, s.kind, s.filter_id or ""))
