"""Stage 4: Recover winning-number fragments from each tier section.

Per section the extractor appends, in this order:

1. bracketed single letters (``[A]``),
2. bracketed full ticket numbers, captured verbatim (``[AB 123456]``),
3. every remaining run of digits, split left-to-right into chunks of at most
   four characters (many tiers print only the trailing four digits, and the
   extractor glues adjacent numbers together).

Full ticket numbers are removed before step 3 so their digits are not counted
twice.
"""

from __future__ import annotations

import re
from typing import Iterable

from kerala_results.models import LotteryResult
from kerala_results.stages.stage3_segment import TierFragment

SERIES_LETTER_RE = re.compile(r"\[([A-Z])\]")
TICKET_TOKEN_RE = re.compile(r"\[([A-Z]+ \d+)\]")
DIGIT_RUN_RE = re.compile(r"\d+")
CHUNK_SIZE = 4


def split_digit_run(run: str, size: int = CHUNK_SIZE) -> list[str]:
    """Split a digit run into consecutive chunks of at most ``size`` characters.

    >>> split_digit_run("1234567890")
    ['1234', '5678', '90']
    """

    return [run[idx : idx + size] for idx in range(0, len(run), size)]


def extract_numbers(remainder: str) -> list[str]:
    """Extract winning fragments from one tier section's remainder text.

    Args:
        remainder: Text after a ``< POSITION >`` marker.

    Returns:
        Fragments in the fixed letters, tickets, digit-chunks order.
    """

    values: list[str] = [match.group(1) for match in SERIES_LETTER_RE.finditer(remainder)]
    values.extend(match.group(1) for match in TICKET_TOKEN_RE.finditer(remainder))

    digits_only = TICKET_TOKEN_RE.sub("", remainder)
    for run in DIGIT_RUN_RE.findall(digits_only):
        values.extend(split_digit_run(run))
    return values


def build_result(fragments: Iterable[TierFragment]) -> LotteryResult:
    """Assemble a ``LotteryResult`` from segmented fragments.

    Repeated positions extend the same tier in document order. A position
    whose sections hold no numbers is left out.
    """

    tiers: dict[str, list[str]] = {}
    for fragment in fragments:
        values = extract_numbers(fragment.remainder)
        if values:
            tiers.setdefault(fragment.position, []).extend(values)
    return LotteryResult({position: tuple(values) for position, values in tiers.items()})
