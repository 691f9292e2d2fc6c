"""Data models shared by the extraction stages, matcher, and storage layers.

Results are immutable once built: a draw's ``LotteryResult`` and the whole
``ResultSnapshot`` are replaced wholesale on refresh and never edited in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Sequence

SERIES_TIER = "Series"

RawWordStream = Sequence[Sequence[Sequence[str]]]
WinnerReport = dict[str, dict[str, list[str]]]


@dataclass(frozen=True)
class LotteryResult:
    """Winning-number fragments for one draw, keyed by prize position.

    Fragment order inside a tier is first-seen order and duplicates are kept.
    The mapping is exposed read-only so matchers can share one instance across
    threads.
    """

    tiers: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {position: tuple(values) for position, values in self.tiers.items()}
        object.__setattr__(self, "tiers", MappingProxyType(frozen))

    @property
    def series_letter(self) -> str | None:
        """Return the draw's series letter, or ``None`` when it was not detected."""

        values = self.tiers.get(SERIES_TIER)
        if not values:
            return None
        return values[0]

    def prize_tiers(self) -> dict[str, tuple[str, ...]]:
        """Return every tier except the synthetic ``Series`` tier."""

        return {position: values for position, values in self.tiers.items() if position != SERIES_TIER}

    def to_dict(self) -> dict[str, list[str]]:
        return {position: list(values) for position, values in self.tiers.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Sequence[str]]) -> LotteryResult:
        return cls({str(position): tuple(str(value) for value in values) for position, values in data.items()})


@dataclass(frozen=True)
class DrawLink:
    """One row of the government result listing page."""

    lottery_name: str
    lottery_date: str
    pdf_link: str

    def to_dict(self) -> dict[str, str]:
        return {
            "lottery_name": self.lottery_name,
            "lottery_date": self.lottery_date,
            "pdf_link": self.pdf_link,
        }


@dataclass(frozen=True)
class ResultSnapshot:
    """Every processed draw at one point in time.

    Attributes:
        last_updated: When the snapshot was built (timezone-aware).
        results: Draw name to ``LotteryResult``.
    """

    last_updated: datetime
    results: Mapping[str, LotteryResult] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    def to_dict(self) -> dict[str, object]:
        return {
            "last_updated": self.last_updated.isoformat(),
            "results": {name: result.to_dict() for name, result in self.results.items()},
        }


@dataclass(frozen=True)
class TicketMatch:
    """Matcher output for one draw.

    Attributes:
        winners: Prize position to winning tickets, in submission order.
        invalid: Tickets rejected as malformed, in submission order.
    """

    winners: dict[str, list[str]]
    invalid: tuple[str, ...] = ()
