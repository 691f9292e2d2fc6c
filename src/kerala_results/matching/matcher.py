"""Ticket matching against built draw results.

All functions here are pure: they read a ``LotteryResult`` or
``ResultSnapshot`` and never modify it, so one snapshot can serve many
concurrent ticket checks.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from kerala_results.errors import InvalidTicketFormat
from kerala_results.models import LotteryResult, ResultSnapshot, TicketMatch, WinnerReport

logger = logging.getLogger(__name__)


def validate_ticket(ticket: object) -> str:
    """Return ``ticket`` if it can be checked.

    Raises:
        InvalidTicketFormat: If ``ticket`` is not a non-empty string.
    """

    if not isinstance(ticket, str) or len(ticket) < 1:
        raise InvalidTicketFormat(ticket)
    return ticket


def winning_positions(result: LotteryResult, ticket: str, deduplicate: bool = False) -> list[str]:
    """List the prize positions ``ticket`` wins in one draw.

    A ticket is eligible only when its first character equals the draw's
    series letter. An eligible ticket wins a tier when any fragment stored for
    that tier is a substring of it. Without ``deduplicate`` a position is
    listed once per matching fragment.

    Args:
        result: Draw result to check against.
        ticket: Submitted ticket string.
        deduplicate: List each position at most once.

    Returns:
        Winning positions in tier order, possibly repeated.

    Raises:
        InvalidTicketFormat: If ``ticket`` is empty or not a string.
    """

    ticket = validate_ticket(ticket)
    series = result.series_letter
    if not series or ticket[0] != series[0]:
        return []

    positions: list[str] = []
    for position, fragments in result.prize_tiers().items():
        for fragment in fragments:
            if fragment in ticket:
                positions.append(position)
                if deduplicate:
                    break
    return positions


def match_tickets(
    result: LotteryResult,
    tickets: Sequence[object],
    deduplicate: bool = False,
) -> TicketMatch:
    """Check a batch of tickets against one draw.

    Malformed tickets are collected in ``TicketMatch.invalid`` and do not stop
    the rest of the batch.

    Args:
        result: Draw result to check against.
        tickets: Submitted tickets in caller order; duplicates allowed.
        deduplicate: Record a ticket at most once per tier.

    Returns:
        Winners per tier plus the rejected tickets.
    """

    winners: dict[str, list[str]] = {}
    invalid: list[str] = []
    for ticket in tickets:
        try:
            positions = winning_positions(result, ticket, deduplicate=deduplicate)
        except InvalidTicketFormat as exc:
            logger.warning("Skipping ticket: %s", exc)
            invalid.append(ticket if isinstance(ticket, str) else repr(ticket))
            continue
        for position in positions:
            winners.setdefault(position, []).append(ticket)
    return TicketMatch(winners=winners, invalid=tuple(invalid))


def merge_draw_winners(per_draw: Mapping[str, Mapping[str, Sequence[str]]]) -> WinnerReport:
    """Combine per-draw winners into ``position -> draw name -> tickets``."""

    report: WinnerReport = {}
    for draw_name, winners in per_draw.items():
        for position, tickets in winners.items():
            report.setdefault(position, {}).setdefault(draw_name, []).extend(tickets)
    return report


def check_tickets(
    snapshot: ResultSnapshot,
    tickets: Sequence[object],
    deduplicate: bool = False,
) -> tuple[WinnerReport, tuple[str, ...]]:
    """Check tickets against every draw in ``snapshot``.

    Returns:
        Tuple of ``(winner_report, invalid_tickets)``. Invalid tickets are
        reported once even though every draw rejects them.
    """

    valid, invalid = partition_tickets(tickets)
    per_draw = {
        draw_name: match_tickets(result, valid, deduplicate=deduplicate).winners
        for draw_name, result in snapshot.results.items()
    }
    return merge_draw_winners(per_draw), tuple(invalid)


def partition_tickets(tickets: Iterable[object]) -> tuple[list[str], list[str]]:
    """Split tickets into checkable ones and rejected ones, keeping order."""

    valid: list[str] = []
    rejected: list[str] = []
    for ticket in tickets:
        try:
            valid.append(validate_ticket(ticket))
        except InvalidTicketFormat as exc:
            logger.warning("Skipping ticket: %s", exc)
            rejected.append(ticket if isinstance(ticket, str) else repr(ticket))
    return valid, rejected
