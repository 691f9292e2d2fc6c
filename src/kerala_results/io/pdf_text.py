"""Word/row extraction from result PDFs using ``pdfplumber``."""

from __future__ import annotations

from io import BytesIO

import pdfplumber

from kerala_results.models import RawWordStream

ROW_TOLERANCE = 1.0


def _group_rows(words: list[dict], tolerance: float = ROW_TOLERANCE) -> list[list[str]]:
    """Group pdfplumber word dicts into rows by vertical position.

    Words whose ``top`` lies within ``tolerance`` points of the current row's
    first word join that row. Rows are ordered top-to-bottom, words within a
    row left-to-right.

    Args:
        words: Word dictionaries from ``page.extract_words()``.
        tolerance: Maximum ``top`` distance for two words to share a row.

    Returns:
        Rows of word texts.
    """

    ordered = sorted(words, key=lambda word: (round(float(word["top"]), 1), float(word["x0"])))
    rows: list[list[dict]] = []
    for word in ordered:
        if rows and abs(float(word["top"]) - float(rows[-1][0]["top"])) <= tolerance:
            rows[-1].append(word)
        else:
            rows.append([word])
    return [[word["text"] for word in sorted(row, key=lambda item: float(item["x0"]))] for row in rows]


def extract_word_stream(pdf_bytes: bytes) -> list[list[list[str]]]:
    """Extract pages → rows → words from PDF bytes.

    Pages without any words are skipped.

    Args:
        pdf_bytes: Raw PDF document content.

    Returns:
        Nested word stream in page, row, word order.
    """

    pages: list[list[list[str]]] = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            words = page.extract_words(x_tolerance=1, y_tolerance=1)
            if not words:
                continue
            pages.append(_group_rows(words))
    return pages


def reconstruct_text(stream: RawWordStream) -> str:
    """Join every word of ``stream`` with single spaces, in reading order."""

    return " ".join(word for page in stream for row in page for word in row)
