"""Top-level orchestration for the staged result-extraction pipeline."""

from __future__ import annotations

from kerala_results.io.pdf_text import extract_word_stream, reconstruct_text
from kerala_results.models import LotteryResult
from kerala_results.stages.stage1_normalize import DEFAULT_NORMALIZER, TextNormalizer
from kerala_results.stages.stage2_series import inject_series
from kerala_results.stages.stage3_segment import segment_text
from kerala_results.stages.stage4_extract import build_result


def process_document(text: str, normalizer: TextNormalizer = DEFAULT_NORMALIZER) -> LotteryResult:
    """Execute every stage from reconstructed text to a draw result.

    Args:
        text: Document text with words space-joined in reading order.
        normalizer: Rule table runner; the built-in table by default.

    Returns:
        The draw's ``LotteryResult``.

    Raises:
        StructuralParseError: If the tagged text cannot be segmented.
    """

    tagged = normalizer.normalize(text)
    tagged = inject_series(tagged)
    return build_result(segment_text(tagged))


def process_pdf(pdf_bytes: bytes, normalizer: TextNormalizer = DEFAULT_NORMALIZER) -> LotteryResult:
    """Extract words from PDF bytes and run :func:`process_document`."""

    text = reconstruct_text(extract_word_stream(pdf_bytes))
    return process_document(text, normalizer=normalizer)
