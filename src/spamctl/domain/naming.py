"""Filter naming scheme: the join key between desired and existing filters.

Names embed a fixed prefix so managed filters can be told apart from
filters a user created by hand.  For identical inputs the generated name is
identical, which keeps reconciliation stable across runs.
"""

from __future__ import annotations

DEFAULT_PREFIX = "Referrer Spam Block"


class FilterNaming:
    """Generates managed filter names and tests membership.

    Examples:
        >>> naming = FilterNaming("ga-spam-control")
        >>> naming.name(1, shard="R")
        'ga-spam-control Segment R #001'
        >>> naming.name(12)
        'ga-spam-control #012'
        >>> naming.is_managed("ga-spam-control Segment R #001")
        True
        >>> naming.is_managed("My own filter")
        False
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        if not prefix.strip():
            msg = "Filter name prefix cannot be empty"
            raise ValueError(msg)
        self.prefix = prefix

    def name(self, ordinal: int, *, shard: str | None = None) -> str:
        """Return the filter name for the *ordinal*-th segment (1-based)."""
        if ordinal < 1:
            msg = f"Filter ordinals start at 1, got {ordinal}"
            raise ValueError(msg)
        if shard is None:
            return f"{self.prefix} #{ordinal:03d}"
        return f"{self.prefix} Segment {shard} #{ordinal:03d}"

    def is_managed(self, candidate: str) -> bool:
        """True iff *candidate* was generated by this naming scheme's prefix."""
        return candidate.startswith(self.prefix)
