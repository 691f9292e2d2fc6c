"""Stage 1: Normalize reconstructed result-document text into tagged text.

The government result PDF repeats page banners and footers, itemizes
consolation tickets with bullets, and annotates winners with locations and
prize amounts. This stage strips that boilerplate with a fixed, ordered rule
table and then tags the two structures later stages care about:

- prize-tier ordinals become `` < 1st > `` style markers,
- full ticket numbers become ``[AB 123456]`` tokens.

Rule order is part of the contract. Removals always run before tagging so no
boilerplate text can be mistaken for a tier marker or ticket number.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Sequence

from kerala_results.errors import RuleCompileError


@dataclass(frozen=True)
class NormalizationRule:
    """One entry of the ordered rule table.

    Attributes:
        name: Short identifier used in error messages.
        pattern: Regular expression source.
        replacement: ``re.sub`` replacement; ``""`` for pure removals.
        flags: ``re`` flags applied when compiling ``pattern``.
    """

    name: str
    pattern: str
    replacement: str = ""
    flags: int = 0


NORMALIZATION_RULES: tuple[NormalizationRule, ...] = (
    NormalizationRule("page_header", r"KERALA.*?( 1st)", "1st"),
    NormalizationRule(
        "page_footer",
        r"Page \d+\s+IT Support : NIC Kerala\s+\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2}",
    ),
    NormalizationRule("bullet", r"(?:\d|\d{2})\)"),
    NormalizationRule("epilogue", r"The prize winners?.*", flags=re.DOTALL),
    NormalizationRule("extractor_artifact", r"\s{2}.\s"),
    NormalizationRule("location", r"\(\S+\)"),
    NormalizationRule("sub_banner", r"FOR +.*? NUMBERS"),
    NormalizationRule("prize_amount", r"(?:Prize Rs :\d+/-)|(?:Prize-Rs :\d+/-)"),
    NormalizationRule(
        "prize_position",
        r"(?<!< )(?<!\d)(?:10th|[1-9](?:st|nd|rd|th)|Cons)(?! >)",
        r" < \g<0> > ",
    ),
    NormalizationRule("ticket_number", r"(?<!\[)[A-Z]{2} \d{6}(?!\])", r"[\g<0>]"),
)

def compile_rules(rules: Sequence[NormalizationRule]) -> tuple[tuple[NormalizationRule, re.Pattern[str]], ...]:
    """Compile an ordered rule table, preserving order.

    Args:
        rules: Rule records in application order.

    Returns:
        ``(rule, compiled_pattern)`` pairs in the same order.

    Raises:
        RuleCompileError: If any pattern is not a valid regular expression.
    """

    compiled: list[tuple[NormalizationRule, re.Pattern[str]]] = []
    for rule in rules:
        try:
            compiled.append((rule, re.compile(rule.pattern, rule.flags)))
        except re.error as exc:
            raise RuleCompileError(f"Rule '{rule.name}' failed to compile: {exc}") from exc
    return tuple(compiled)


@dataclass(frozen=True)
class TextNormalizer:
    """Apply an ordered rule table to document text.

    Patterns are compiled once at construction; a broken table fails there
    rather than on the first document.
    """

    rules: tuple[NormalizationRule, ...] = NORMALIZATION_RULES
    _compiled: tuple[tuple[NormalizationRule, re.Pattern[str]], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "_compiled", compile_rules(self.rules))

    def normalize(self, text: str) -> str:
        """Run every rule over ``text`` in table order.

        Args:
            text: Reconstructed document text (one line, words space-joined).

        Returns:
            Tagged text containing ``< POSITION >`` and ``[TOKEN]`` markers.
        """

        for rule, pattern in self._compiled:
            text = pattern.sub(rule.replacement, text)
        return text


DEFAULT_NORMALIZER = TextNormalizer()
