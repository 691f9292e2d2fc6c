"""Markdown report generation for result snapshots."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from kerala_results.models import SERIES_TIER, ResultSnapshot

ORDINAL_RE = re.compile(r"\d+")
UNRANKED = 10**9


def _position_sort_key(position: str) -> tuple[int, str]:
    """Sort prize positions by ordinal, with ``Series`` first and ``Cons`` last.

    Args:
        position: Prize position label such as ``1st`` or ``Cons``.

    Returns:
        Tuple suitable for stable sorting.
    """

    if position == SERIES_TIER:
        return -1, position
    ordinal = ORDINAL_RE.match(position)
    return (int(ordinal.group()) if ordinal else UNRANKED), position


def _table_row(cells: Iterable[str]) -> str:
    return f"| {' | '.join(cells)} |"


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a pipe table with a ``---`` separator under ``headers``."""

    lines = [_table_row(headers), _table_row(["---"] * len(headers))]
    lines.extend(_table_row(row) for row in rows)
    return "\n".join(lines)


def build_report_md(snapshot: ResultSnapshot) -> str:
    """Build the markdown summary for one snapshot.

    Draws are listed by name. Draws without a series letter are flagged since
    no ticket can match them.

    Args:
        snapshot: Snapshot to summarise.

    Returns:
        Full markdown content with summary tables.
    """

    draw_rows = []
    for name in sorted(snapshot.results):
        result = snapshot.results[name]
        prize_tiers = result.prize_tiers()
        draw_rows.append(
            (
                name,
                result.series_letter or "MISSING",
                str(len(prize_tiers)),
                str(sum(len(values) for values in prize_tiers.values())),
            )
        )

    sections = [
        "# Result Report",
        "",
        f"Last updated: {snapshot.last_updated.isoformat()}",
        "",
        "## Draws",
        _markdown_table(["draw", "series", "prize_tiers", "fragments"], draw_rows),
    ]

    for name in sorted(snapshot.results):
        result = snapshot.results[name]
        tier_rows = [
            (position, str(len(result.tiers[position])), " ".join(result.tiers[position][:5]))
            for position in sorted(result.tiers, key=_position_sort_key)
        ]
        sections.extend(
            [
                "",
                f"## {name}",
                _markdown_table(["position", "fragments", "first_fragments"], tier_rows),
            ]
        )

    return "\n".join(sections) + "\n"
