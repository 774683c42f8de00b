"""Domain list merging and snapshot diffing."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from spamctl.domain.errors import DomainNameError


class DomainSyncResult(BaseModel):
    """Outcome of one domain-list sync, every tuple sorted by name."""

    model_config = {"frozen": True}

    unchanged: tuple[str, ...] = ()
    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    snapshot: tuple[str, ...] = ()

    @property
    def statistics(self) -> dict[str, int]:
        return {
            "unchanged": len(self.unchanged),
            "added": len(self.added),
            "removed": len(self.removed),
            "total": len(self.unchanged) + len(self.added) + len(self.removed),
        }

    def changes(self) -> list[dict[str, str]]:
        """Every domain with its change type, ordered by domain name."""
        rows = [{"domain": d, "change": "unchanged"} for d in self.unchanged]
        rows.extend({"domain": d, "change": "added"} for d in self.added)
        rows.extend({"domain": d, "change": "removed"} for d in self.removed)
        return sorted(rows, key=lambda row: row["domain"])


def normalize_domains(domain_names: Iterable[str]) -> list[str]:
    """Trim, drop blanks, deduplicate, and sort lexicographically."""
    cleaned = {name.strip() for name in domain_names}
    cleaned.discard("")
    return sorted(cleaned)


def parse_domain_lines(text: str) -> list[str]:
    """Split newline-delimited text into trimmed, non-blank domain names.

    Order and duplicates are preserved; callers merge and normalize.
    """
    return [line.strip() for line in text.splitlines() if line.strip()]


def check_domain_names(domain_names: Iterable[str]) -> list[str]:
    """Return trimmed names, raising :class:`DomainNameError` on blank input."""
    checked: list[str] = []
    for name in domain_names:
        trimmed = name.strip()
        if not trimmed:
            msg = "Domain names cannot be empty"
            raise DomainNameError(msg, value=name)
        checked.append(trimmed)
    return checked


def diff_domains(previous: Iterable[str], current: Iterable[str]) -> DomainSyncResult:
    """Diff two domain lists.

    ``removed = previous - current``, ``added = current - previous``,
    ``unchanged = current & previous``; *current* becomes the snapshot.
    """
    old = set(previous)
    snapshot = normalize_domains(current)
    new = set(snapshot)
    return DomainSyncResult(
        unchanged=tuple(sorted(new & old)),
        added=tuple(sorted(new - old)),
        removed=tuple(sorted(old - new)),
        snapshot=tuple(snapshot),
    )
