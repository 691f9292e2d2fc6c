"""Unit tests for PDF word-stream assembly."""

from __future__ import annotations

from kerala_results.io.pdf_text import _group_rows, reconstruct_text


def _word(text: str, x0: float, top: float) -> dict:
    return {"text": text, "x0": x0, "top": top}


def test_group_rows_orders_rows_and_words() -> None:
    """Words should be grouped into rows by top and ordered left to right."""

    words = [
        _word("123456", 80.0, 120.4),
        _word("1st", 10.0, 100.0),
        _word("WX", 50.0, 120.0),
        _word("Prize", 40.0, 100.3),
    ]

    assert _group_rows(words) == [["1st", "Prize"], ["WX", "123456"]]


def test_reconstruct_text_joins_pages_rows_and_words_with_single_spaces() -> None:
    """All words should be joined in reading order with single spaces."""

    stream = [
        [["KERALA", "STATE"], ["1st", "Prize"]],
        [["Cons", "1234"]],
    ]

    assert reconstruct_text(stream) == "KERALA STATE 1st Prize Cons 1234"


def test_reconstruct_text_of_empty_stream_is_empty() -> None:
    """An empty word stream should reconstruct to an empty string."""

    assert reconstruct_text([]) == ""
