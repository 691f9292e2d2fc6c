"""Unit tests for Stage 1 rule-table normalization."""

from __future__ import annotations

import pytest

from kerala_results.errors import RuleCompileError
from kerala_results.stages.stage1_normalize import (
    DEFAULT_NORMALIZER,
    NORMALIZATION_RULES,
    NormalizationRule,
    TextNormalizer,
)


def _squash(text: str) -> str:
    return " ".join(text.split())


def test_rule_table_order_is_fixed() -> None:
    """Removals come first in a fixed order and the two tagging rules run last."""

    assert [rule.name for rule in NORMALIZATION_RULES] == [
        "page_header",
        "page_footer",
        "bullet",
        "epilogue",
        "extractor_artifact",
        "location",
        "sub_banner",
        "prize_amount",
        "prize_position",
        "ticket_number",
    ]


def test_header_collapses_to_first_prize_marker() -> None:
    """Everything before the first prize should be dropped."""

    text = "KERALA STATE LOTTERIES - RESULT AKSHAYA NO.AK-650 DRAW 1st Prize Rs :7000000/- AB 123456"

    assert _squash(DEFAULT_NORMALIZER.normalize(text)) == "< 1st > [AB 123456]"


def test_footer_and_bullets_are_removed() -> None:
    """Page footers and numbered bullets should be removed."""

    text = "Cons 1) 1234 Page 3 IT Support : NIC Kerala 01/08/2024 15:30:01 2) 5678"

    assert _squash(DEFAULT_NORMALIZER.normalize(text)) == "< Cons > 1234 5678"


def test_epilogue_and_everything_after_is_removed() -> None:
    """The closing notice and all text after it should be removed."""

    text = "2nd AB 123456 The prize winners are advised to verify 3rd CD 654321"

    assert _squash(DEFAULT_NORMALIZER.normalize(text)) == "< 2nd > [AB 123456]"


def test_locations_banners_and_prize_amounts_are_removed() -> None:
    """Locations, ending-number banners and prize amounts should be removed."""

    text = (
        "3rd Prize Rs :100000/- AB 123456 (KANNUR) "
        "4th Prize-Rs :5000/- FOR THE TICKETS ENDING WITH THE FOLLOWING NUMBERS 1234 "
        "5th Prize Rs :2000/- FOR THE TICKETS ENDING WITH THE FOLLOWING NUMBERS 5678"
    )

    assert _squash(DEFAULT_NORMALIZER.normalize(text)) == "< 3rd > [AB 123456] < 4th > 1234 < 5th > 5678"


def test_extractor_artifact_is_collapsed() -> None:
    """A stray character between double spaces should be removed."""

    assert DEFAULT_NORMALIZER.normalize("1234  x 5678") == "12345678"


def test_tenth_prize_is_tagged_whole() -> None:
    """10th should be tagged as one position, not as 0th."""

    assert _squash(DEFAULT_NORMALIZER.normalize("10th 1234")) == "< 10th > 1234"


def test_tagging_does_not_double_wrap() -> None:
    """Re-running the tagging rules on tagged text should change nothing."""

    tagged = DEFAULT_NORMALIZER.normalize("1st AB 123456 10th 1234 Cons CD 654321")
    tagging_only = TextNormalizer(NORMALIZATION_RULES[-2:])

    again = tagging_only.normalize(tagged)

    assert again == tagged
    assert "[[" not in again
    assert "< <" not in again


def test_invalid_rule_pattern_fails_at_construction() -> None:
    """A rule with a bad pattern should fail when the normalizer is built."""

    rules = (*NORMALIZATION_RULES, NormalizationRule("broken", r"([A-Z"))

    with pytest.raises(RuleCompileError, match="broken"):
        TextNormalizer(rules)
