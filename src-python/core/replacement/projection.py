"""Annotation projector — per-line highlight spans in both coordinate spaces.

The original text is highlighted at each match's stored position.  The
replaced text is highlighted at the match's *translated* position:

    replaced_position[i] = position[i] + sum(len(sub[j]) - len(orig[j]) for j < i)

computed as a running offset.  Searching the replaced text for the
substitute would break as soon as a substitute repeats or is empty.

Precondition: matched terms and substitutes contain no line breaks.  A span
that straddles a line break is dropped (with a warning) rather than split.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple

from models.schemas import AnnotatedLine, HighlightRole, HighlightSpan
from core.replacement.resolver import Match
from core.replacement.substitution import ReplacementTrace

logger = logging.getLogger(__name__)


class _LineRange(NamedTuple):
    start: int
    end: int        # Exclusive, line terminator not included
    text: str


def replaced_positions(matches: Sequence[Match]) -> list[int]:
    """Start offset of every match's substitute in the replaced text."""
    positions: list[int] = []
    offset = 0
    for m in matches:
        positions.append(m.position + offset)
        offset += len(m.substitute) - len(m.original)
    return positions


def split_line_ranges(text: str) -> list[_LineRange]:
    """Split *text* into lines, keeping each line's offset range.

    Uses :meth:`str.splitlines` boundaries (``\\n``, ``\\r\\n``, ``\\r`` and
    the Unicode line separators).
    """
    ranges: list[_LineRange] = []
    cursor = 0
    for raw in text.splitlines(keepends=True):
        line = raw.splitlines()[0]
        ranges.append(_LineRange(cursor, cursor + len(line), line))
        cursor += len(raw)
    return ranges


def project_lines(
    text: str,
    spans: Sequence[tuple[int, int]],
    role: HighlightRole,
) -> list[AnnotatedLine]:
    """Distribute sorted, disjoint ``(start, end)`` spans over the lines of *text*.

    Returned span offsets are relative to the start of their line.
    """
    lines = split_line_ranges(text)
    annotated = [AnnotatedLine(text=ln.text) for ln in lines]

    li = 0
    for start, end in spans:
        if end <= start:
            continue
        while li < len(lines) and lines[li].end < start:
            li += 1
        if li == len(lines):
            break
        line = lines[li]
        if start < line.start or end > line.end:
            logger.warning(
                f"Dropping {role.value} highlight [{start}, {end}) that crosses "
                f"a line boundary"
            )
            continue
        annotated[li].highlight_spans.append(
            HighlightSpan(start=start - line.start, end=end - line.start, role=role)
        )
    return annotated


def project_annotations(
    trace: ReplacementTrace,
) -> tuple[list[AnnotatedLine], list[AnnotatedLine]]:
    """Return ``(original_lines, replaced_lines)`` for *trace*."""
    original_spans = [(m.position, m.end) for m in trace.matches]
    replaced_spans = [
        (pos, pos + len(m.substitute))
        for m, pos in zip(trace.matches, replaced_positions(trace.matches))
    ]
    return (
        project_lines(trace.text, original_spans, HighlightRole.ORIGINAL),
        project_lines(trace.replaced_text, replaced_spans, HighlightRole.SUBSTITUTE),
    )
