"""FilterFactory: turn a domain list into desired filter specs."""

from __future__ import annotations

from collections.abc import Iterable

from spamctl.domain.filters import DEFAULT_FIELD, FilterDetails, FilterSpec
from spamctl.domain.naming import FilterNaming
from spamctl.domain.segments import generate_segments, generate_shards, validate_domain_name

DEFAULT_MAX_EXPRESSION_LENGTH = 255


class FilterFactory:
    """Builds one exclude filter per packed expression segment.

    Input is deduplicated and sorted before packing so the same domain set
    always yields the same names and expressions.
    """

    def __init__(
        self,
        naming: FilterNaming,
        *,
        max_expression_length: int = DEFAULT_MAX_EXPRESSION_LENGTH,
        field: str = DEFAULT_FIELD,
        sharded: bool = True,
    ) -> None:
        self.naming = naming
        self.max_expression_length = max_expression_length
        self.field = field
        self.sharded = sharded

    def build(self, domain_names: Iterable[str]) -> list[FilterSpec]:
        """Return the desired filters for *domain_names*.

        Raises:
            DomainNameError: A name is empty or blank.
            SegmentError: A name is too long for a single expression.
        """
        names = list(domain_names)
        for name in names:
            validate_domain_name(name)
        unique = sorted(set(names))

        filters: list[FilterSpec] = []
        if self.sharded:
            for shard in generate_shards(unique, self.max_expression_length):
                for ordinal, expression in enumerate(shard.segments, start=1):
                    filters.append(
                        self._make(self.naming.name(ordinal, shard=shard.key), expression)
                    )
        else:
            segments = generate_segments(unique, self.max_expression_length)
            for ordinal, expression in enumerate(segments, start=1):
                filters.append(self._make(self.naming.name(ordinal), expression))
        return filters

    def _make(self, name: str, expression: str) -> FilterSpec:
        return FilterSpec(
            name=name,
            exclude_details=FilterDetails(field=self.field, expression_value=expression),
        )
