"""Validation helpers for extracted draw results."""

from __future__ import annotations

import re
from typing import Mapping

from kerala_results.models import SERIES_TIER, LotteryResult

SERIES_LETTER_RE = re.compile(r"^[A-Z]$")
WINNING_FRAGMENT_RE = re.compile(r"^(?:[A-Z]|[A-Z]{2} \d{6}|\d{1,4})$")


def result_issues(result: LotteryResult) -> list[str]:
    """List shape problems in one draw result.

    Args:
        result: Draw result to inspect.

    Returns:
        Human-readable issues; empty when the result is well formed.
    """

    issues: list[str] = []
    series = result.series_letter
    if series is None:
        issues.append("missing Series tier; no ticket can match this draw")
    elif not SERIES_LETTER_RE.fullmatch(series):
        issues.append(f"invalid series letter '{series}'")

    for position, values in result.tiers.items():
        if position == SERIES_TIER:
            continue
        for value in values:
            if not WINNING_FRAGMENT_RE.fullmatch(value):
                issues.append(f"{position}: unexpected fragment '{value}'")
    return issues


def validate_results(results: Mapping[str, LotteryResult]) -> None:
    """Validate every draw result.

    Args:
        results: Draw name to result.

    Raises:
        ValueError: If any draw has issues; the message lists up to 25.
    """

    errors = [f"{name}: {issue}" for name, result in results.items() for issue in result_issues(result)]
    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:25])
        rest = len(errors) - min(25, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise ValueError(f"Result validation failed with {len(errors)} errors:\n{preview}{more}")
