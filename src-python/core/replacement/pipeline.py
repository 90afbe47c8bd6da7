"""Replacement pipeline — resolve, substitute, project in one call."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from models.schemas import AnnotatedLine
from core.replacement.dictionary import DictionaryInput, normalize_dictionary
from core.replacement.projection import project_annotations, replaced_positions
from core.replacement.resolver import find_matches
from core.replacement.substitution import ReplacementTrace, apply_matches

logger = logging.getLogger(__name__)


@dataclass
class ReplacementOutcome:
    trace: ReplacementTrace
    original_lines: list[AnnotatedLine] = field(default_factory=list)
    replaced_lines: list[AnnotatedLine] = field(default_factory=list)

    @property
    def replaced_text(self) -> str:
        return self.trace.replaced_text

    @property
    def match_count(self) -> int:
        return self.trace.count

    @property
    def replaced_positions(self) -> list[int]:
        return replaced_positions(self.trace.matches)

    @property
    def summary(self) -> str:
        if not self.match_count:
            return "No terms were replaced"
        return f"Replaced {self.match_count} term occurrence(s)"


def run_replacement(text: str, dictionary: DictionaryInput) -> ReplacementOutcome:
    """Find, apply and annotate every dictionary term in *text*."""
    t0 = time.perf_counter()
    terms = normalize_dictionary(dictionary)

    matches = find_matches(text, terms)
    trace = apply_matches(text, matches)
    original_lines, replaced_lines = project_annotations(trace)

    elapsed_ms = (time.perf_counter() - t0) * 1000
    logger.info(
        f"Replacement: {len(terms)} term(s), {trace.count} match(es), "
        f"{len(text)} → {len(trace.replaced_text)} chars in {elapsed_ms:.1f} ms",
        extra={
            "term_count": len(terms),
            "match_count": trace.count,
            "duration_ms": round(elapsed_ms, 1),
        },
    )
    return ReplacementOutcome(
        trace=trace,
        original_lines=original_lines,
        replaced_lines=replaced_lines,
    )
