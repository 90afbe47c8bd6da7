"""Match resolver — finds dictionary terms in text and resolves overlaps.

Conflict policy (length priority):
  - Terms are processed longest ``original`` first.
  - A candidate is accepted only when its ``[position, end)`` range does not
    intersect an already accepted match, so a shorter term covered fully or
    partly by a longer one is discarded.
  - Terms of the same length form one tier.  Within a tier, candidates are
    accepted leftmost first (then by insertion order), which makes the
    result independent of the order the dictionary was supplied in.

Equal-length ties are not settled term by term in insertion order.  That
would let the first-listed term win a tie, so reordering the dictionary
could change the output.  Position decides instead: with ``("bc", "2")``
listed before ``("ab", "1")``, ``"abc"`` becomes ``"1c"`` because ``"ab"``
starts further left.  Insertion order only breaks ties between candidates at
the same position, which requires duplicate originals.

Matching is literal and case-sensitive: ``str.find`` has no pattern syntax,
so terms containing ``.*+?()[]`` and friends need no escaping.
"""

from __future__ import annotations

import bisect
import itertools
from typing import NamedTuple

from core.replacement.dictionary import DictionaryInput, Term, by_priority, normalize_dictionary


class Match(NamedTuple):
    original: str
    substitute: str
    position: int

    @property
    def length(self) -> int:
        return len(self.original)

    @property
    def end(self) -> int:
        return self.position + len(self.original)


class _AcceptedSpans:
    """Sorted, disjoint ``[start, end)`` ranges with O(log n) overlap tests."""

    def __init__(self) -> None:
        self._starts: list[int] = []
        self._ends: list[int] = []

    def overlaps(self, start: int, end: int) -> bool:
        i = bisect.bisect_right(self._starts, start)
        # Nearest range starting at or before `start`
        if i > 0 and self._ends[i - 1] > start:
            return True
        # Nearest range starting after `start`
        if i < len(self._starts) and self._starts[i] < end:
            return True
        return False

    def add(self, start: int, end: int) -> None:
        i = bisect.bisect_right(self._starts, start)
        self._starts.insert(i, start)
        self._ends.insert(i, end)


def _occurrences(text: str, needle: str) -> list[int]:
    """Every start offset of *needle* in *text*, overlapping ones included."""
    positions: list[int] = []
    pos = text.find(needle)
    while pos != -1:
        positions.append(pos)
        pos = text.find(needle, pos + 1)
    return positions


def find_matches(text: str, dictionary: DictionaryInput) -> list[Match]:
    """Return the non-overlapping, position-sorted match set for *text*."""
    if not text:
        return []
    terms = by_priority(normalize_dictionary(dictionary))
    if not terms:
        return []

    accepted = _AcceptedSpans()
    matches: list[Match] = []

    for _length, tier in itertools.groupby(terms, key=lambda t: len(t.original)):
        candidates: list[tuple[int, int, Term]] = []
        for order, term in enumerate(tier):
            for pos in _occurrences(text, term.original):
                candidates.append((pos, order, term))
        candidates.sort(key=lambda c: (c[0], c[1]))

        for pos, _order, term in candidates:
            end = pos + len(term.original)
            if accepted.overlaps(pos, end):
                continue
            accepted.add(pos, end)
            matches.append(Match(term.original, term.substitute, pos))

    matches.sort(key=lambda m: m.position)
    return matches
