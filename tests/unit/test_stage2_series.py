"""Unit tests for Stage 2 series-letter detection."""

from __future__ import annotations

from kerala_results.stages.stage2_series import find_series_letter, inject_series


def test_single_letter_token_is_the_series() -> None:
    """The first bracketed token's letter should be the series."""

    assert find_series_letter(" < 1st > [K] 1234") == "K"


def test_first_ticket_number_supplies_the_letter() -> None:
    """On the real template the first bracketed token is the first-prize ticket."""

    assert find_series_letter(" < 1st > [PA 123456] < 2nd > [QB 654321]") == "P"


def test_inject_series_prepends_series_section() -> None:
    """Series injection should prepend a Series tier."""

    text = " < 1st > [PA 123456] "

    assert inject_series(text) == " < Series > [P]  < 1st > [PA 123456] "


def test_text_without_bracketed_token_is_unchanged() -> None:
    """Text without bracketed tokens should pass through unchanged."""

    text = " < Cons > 1234 5678"

    assert find_series_letter(text) is None
    assert inject_series(text) == text


def test_lowercase_bracket_content_is_not_a_series() -> None:
    """Lowercase bracket content should not be taken as a series."""

    assert find_series_letter("[x] 1234") is None
