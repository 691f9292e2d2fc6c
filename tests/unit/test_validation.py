"""Unit tests for extracted-result validation."""

from __future__ import annotations

import pytest

from kerala_results.models import LotteryResult
from kerala_results.validation import result_issues, validate_results


def test_well_formed_result_has_no_issues() -> None:
    """A well-formed draw should pass validation."""

    result = LotteryResult({"Series": ("A",), "1st": ("AB 123456",), "Cons": ("1234", "56")})

    assert result_issues(result) == []
    validate_results({"Akshaya": result})


def test_missing_series_is_reported() -> None:
    """A draw without a Series tier should be flagged."""

    issues = result_issues(LotteryResult({"1st": ("AB 123456",)}))

    assert issues == ["missing Series tier; no ticket can match this draw"]


def test_unexpected_fragments_are_reported() -> None:
    """Fragments of an unexpected shape should be flagged."""

    issues = result_issues(LotteryResult({"Series": ("A",), "2nd": ("ABC 12",)}))

    assert issues == ["2nd: unexpected fragment 'ABC 12'"]


def test_validate_results_aggregates_errors() -> None:
    """Issues from every draw should be reported in one ValueError."""

    with pytest.raises(ValueError, match="Result validation failed with 2 errors"):
        validate_results(
            {
                "one": LotteryResult({"1st": ("1234",)}),
                "two": LotteryResult({"Series": ("a",)}),
            }
        )
