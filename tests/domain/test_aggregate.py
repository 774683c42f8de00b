"""Tests for status aggregation."""

from __future__ import annotations

import pytest

from spamctl.domain.aggregate import (
    calculate_global_status,
    domain_coverage,
    installation_status,
    majority_status,
    majority_threshold,
)
from spamctl.domain.filters import FilterStatus
from spamctl.domain.status import Status
from tests.conftest import make_spec

S = Status


def _statuses(*kinds: Status) -> list[FilterStatus]:
    return [FilterStatus(filter=make_spec(f"p #{i:03d}", "x"), kind=k) for i, k in enumerate(kinds)]


class TestInstallationStatus:
    def test_ratio_truncates(self) -> None:
        result = installation_status(_statuses(S.UP_TO_DATE, S.OUTDATED, S.NOT_INSTALLED))
        assert (result.total, result.up_to_date) == (3, 1)
        assert result.percent == 33
        assert str(result) == "33%"

    def test_empty_is_zero_percent(self) -> None:
        result = installation_status([])
        assert result.total == 0
        assert result.percent == 0

    def test_all_up_to_date(self) -> None:
        assert installation_status(_statuses(S.UP_TO_DATE, S.UP_TO_DATE)).percent == 100


class TestDomainCoverage:
    def test_counts_matched_domains(self) -> None:
        filters = [make_spec("p #001", r"spam\.com|evil\.org")]
        coverage = domain_coverage(filters, ["spam.com", "evil.org", "other.net"])
        assert (coverage.total_domains, coverage.domains_covered) == (3, 2)
        assert coverage.percent == 66

    def test_case_insensitive_by_default(self) -> None:
        coverage = domain_coverage([make_spec("p #001", r"spam\.com")], ["SPAM.com"])
        assert coverage.domains_covered == 1

    def test_invalid_expression_ignored(self) -> None:
        coverage = domain_coverage([make_spec("p #001", "(")], ["a.com"])
        assert coverage.domains_covered == 0

    def test_no_domains(self) -> None:
        assert domain_coverage([], []).percent == 0


class TestMajorityThreshold:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [(1, 1), (2, 2), (3, 2), (4, 3), (5, 3), (6, 4), (7, 4), (8, 5), (9, 5), (10, 6),
         (11, 6), (12, 7), (13, 7)],
    )
    def test_threshold(self, count: int, expected: int) -> None:
        assert majority_threshold(count) == expected


class TestMajorityStatus:
    def test_majority_available(self) -> None:
        statuses = [S.NOT_INSTALLED, S.NOT_INSTALLED, S.NOT_INSTALLED, S.OUTDATED, S.UNKNOWN]
        assert majority_status(statuses) is S.NOT_INSTALLED

    def test_no_majority(self) -> None:
        assert majority_status([S.OUTDATED, S.UNKNOWN, S.UP_TO_DATE]) is None

    def test_empty(self) -> None:
        assert majority_status([]) is None


class TestCalculateGlobalStatus:
    def test_all_identical(self) -> None:
        assert calculate_global_status([S.UP_TO_DATE] * 3) is S.UP_TO_DATE
        assert calculate_global_status([S.OBSOLETE]) is S.OBSOLETE

    def test_three_distinct_is_unknown(self) -> None:
        assert calculate_global_status([S.UP_TO_DATE, S.OUTDATED, S.NOT_INSTALLED]) is S.UNKNOWN

    def test_even_split_is_unknown(self) -> None:
        assert calculate_global_status([S.UP_TO_DATE, S.OUTDATED]) is S.UNKNOWN
        assert (
            calculate_global_status([S.UP_TO_DATE, S.UP_TO_DATE, S.OUTDATED, S.OUTDATED])
            is S.UNKNOWN
        )

    def test_majority_wins(self) -> None:
        assert calculate_global_status([S.OUTDATED, S.OUTDATED, S.UP_TO_DATE]) is S.OUTDATED
        assert (
            calculate_global_status([S.UP_TO_DATE, S.UP_TO_DATE, S.UP_TO_DATE, S.OUTDATED])
            is S.UP_TO_DATE
        )

    def test_empty_is_unknown(self) -> None:
        assert calculate_global_status([]) is S.UNKNOWN

    def test_accepts_generator(self) -> None:
        assert calculate_global_status(s for s in [S.NOT_SET, S.NOT_SET]) is S.NOT_SET
