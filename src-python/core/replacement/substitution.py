"""Substitution engine — applies a resolved match set in one pass."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from core.replacement.errors import ConsistencyError
from core.replacement.resolver import Match


class ReplacementTrace(NamedTuple):
    """Replaced text plus the matches that produced it.

    Match positions stay in original-text coordinates.
    """
    text: str
    replaced_text: str
    matches: tuple[Match, ...]

    @property
    def count(self) -> int:
        return len(self.matches)


def apply_matches(text: str, matches: Sequence[Match]) -> ReplacementTrace:
    """Rebuild *text* left to right, swapping each match for its substitute.

    Raises:
        ConsistencyError: if the matches are unsorted, overlap, run past the
            end of *text*, or no longer point at their original term.
    """
    parts: list[str] = []
    cursor = 0
    for m in matches:
        if m.position < cursor:
            raise ConsistencyError(
                f"Match {m.original!r} at {m.position} overlaps or precedes "
                f"the previous match ending at {cursor}"
            )
        if text[m.position:m.end] != m.original:
            raise ConsistencyError(
                f"Match {m.original!r} at {m.position} does not match the text "
                f"({text[m.position:m.end]!r})"
            )
        parts.append(text[cursor:m.position])
        parts.append(m.substitute)
        cursor = m.end
    parts.append(text[cursor:])

    return ReplacementTrace(text=text, replaced_text="".join(parts), matches=tuple(matches))
