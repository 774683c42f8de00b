"""Filter models: desired specs, existing remote filters, and statuses.

Content equality (``same_content``) is the reconciliation comparison: it
covers type, name, and every exclude-details field, and ignores the remote
identifier and any other provider-only metadata.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from spamctl.domain.status import Status

FILTER_KIND = "analytics#filter"
EXPRESSION_KIND = "analytics#filterExpression"
FILTER_TYPE_EXCLUDE = "EXCLUDE"
MATCH_TYPE_MATCHES = "MATCHES"
DEFAULT_FIELD = "CAMPAIGN_SOURCE"


class FilterDetails(BaseModel):
    """Exclude details: which field is matched, and against what expression."""

    model_config = {"frozen": True}

    kind: str = EXPRESSION_KIND
    field: str = DEFAULT_FIELD
    match_type: str = MATCH_TYPE_MATCHES
    expression_value: str
    case_sensitive: bool = False


class FilterSpec(BaseModel):
    """A desired filter as produced by the filter factory."""

    model_config = {"frozen": True}

    name: str
    type: str = FILTER_TYPE_EXCLUDE
    kind: str = FILTER_KIND
    exclude_details: FilterDetails

    def same_content(self, other: FilterSpec) -> bool:
        """Compare type, name, and exclude details; remote metadata is ignored."""
        return (
            self.type == other.type
            and self.name == other.name
            and self.exclude_details == other.exclude_details
        )

    def spec(self) -> FilterSpec:
        """Return the plain content of this filter, without remote metadata."""
        return FilterSpec(
            name=self.name,
            type=self.type,
            kind=self.kind,
            exclude_details=self.exclude_details,
        )


class ExistingFilter(FilterSpec):
    """A filter as stored by the provider, carrying its remote identifier."""

    id: str
    account_id: str | None = None
    created: datetime | None = None
    updated: datetime | None = None


class FilterStatus(BaseModel):
    """Reconciliation outcome for one filter name.

    ``filter`` holds the content to act on.  For OUTDATED and OBSOLETE it
    also carries the existing filter's ``id`` so the orchestrator updates
    or removes the remote object instead of creating a new one.
    """

    model_config = {"frozen": True}

    filter: FilterSpec
    kind: Status
    filter_id: str | None = None

    @property
    def name(self) -> str:
        return self.filter.name

    def to_dict(self) -> dict[str, str | None]:
        return {
            "name": self.filter.name,
            "id": self.filter_id,
            "status": str(self.kind),
        }


class InstallationStatus(BaseModel):
    """How many of the managed filters are up to date."""

    model_config = {"frozen": True}

    total: int = 0
    up_to_date: int = 0

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return self.up_to_date * 100 // self.total

    def __str__(self) -> str:
        return f"{self.percent}%"


class DomainCoverage(BaseModel):
    """How many known spam domains at least one managed filter matches."""

    model_config = {"frozen": True}

    total_domains: int = 0
    domains_covered: int = 0

    @property
    def percent(self) -> int:
        if self.total_domains == 0:
            return 0
        return self.domains_covered * 100 // self.total_domains

    def __str__(self) -> str:
        return f"{self.percent}%"
