"""Stage 2: Detect the draw's series letter and inject a ``Series`` tier."""

from __future__ import annotations

import re

SERIES_TOKEN_RE = re.compile(r"\[([A-Z])")


def find_series_letter(text: str) -> str | None:
    """Return the leading letter of the first bracketed token in ``text``.

    A bracketed single letter (``[A]``) yields that letter. On the government
    template the first bracketed token is the first-prize ticket number, so
    ``[AB 123456]`` yields its lottery letter ``A``.

    Args:
        text: Stage 1 tagged text.

    Returns:
        The uppercase letter, or ``None`` when no bracketed token starts with
        one.
    """

    match = SERIES_TOKEN_RE.search(text)
    if match is None:
        return None
    return match.group(1)


def inject_series(text: str) -> str:
    """Prepend a synthetic ``< Series > [X]`` section when a letter is found.

    Text without a detectable series letter is returned unchanged; every
    ticket then fails the series check for that draw.
    """

    letter = find_series_letter(text)
    if letter is None:
        return text
    return f" < Series > [{letter}] {text}"
