"""Stage 3: Split tagged text into ``(prize position, remainder)`` fragments."""

from __future__ import annotations

from dataclasses import dataclass

from kerala_results.errors import StructuralParseError


@dataclass(frozen=True)
class TierFragment:
    """One tier section of the tagged document.

    Attributes:
        position: Prize position key such as ``1st``, ``Cons`` or ``Series``.
        remainder: Trimmed text following the position marker.
    """

    position: str
    remainder: str


def segment_text(text: str) -> list[TierFragment]:
    """Split Stage 2 text on ``<`` markers into tier fragments.

    Empty pieces (including any text before the first marker that is only
    whitespace) are skipped. Positions may repeat; the extractor appends
    repeated sections to the same tier.

    Args:
        text: Tagged text produced by Stage 1 and Stage 2.

    Returns:
        Fragments in document order.

    Raises:
        StructuralParseError: If a non-empty piece has no ``>`` separator.
    """

    fragments: list[TierFragment] = []
    for piece in text.split("<"):
        piece = piece.strip()
        if not piece:
            continue
        if ">" not in piece:
            preview = piece[:40]
            raise StructuralParseError(f"Tier marker without '>' near: '{preview}'")
        position, remainder = piece.split(">", 1)
        fragments.append(TierFragment(position=position.strip(), remainder=remainder.strip()))
    return fragments
