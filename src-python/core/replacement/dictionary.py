"""Term dictionary — normalization and length-priority ordering."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import NamedTuple, Union

logger = logging.getLogger(__name__)


class Term(NamedTuple):
    original: str
    substitute: str


DictionaryInput = Union[Mapping[str, str], Iterable[Term], Iterable[tuple[str, str]]]


def normalize_dictionary(entries: DictionaryInput) -> tuple[Term, ...]:
    """Copy *entries* into an immutable tuple of :class:`Term`.

    Insertion order is kept.  Entries with an empty ``original`` can never
    match anything and are skipped without affecting the others.  Values
    are not stripped or deduplicated; that is the caller's business.
    """
    if isinstance(entries, Mapping):
        pairs: Iterable = entries.items()
    else:
        pairs = entries

    terms: list[Term] = []
    skipped = 0
    for pair in pairs:
        original, substitute = pair
        if not isinstance(original, str) or not isinstance(substitute, str):
            raise TypeError(
                f"Term values must be strings, got {type(original).__name__!r} "
                f"and {type(substitute).__name__!r}"
            )
        if not original:
            skipped += 1
            continue
        terms.append(Term(original, substitute))

    if skipped:
        logger.debug(f"Skipped {skipped} term(s) with an empty original")
    return tuple(terms)


def by_priority(terms: Iterable[Term]) -> list[Term]:
    """Longest original first; equal lengths keep their insertion order."""
    return sorted(terms, key=lambda t: len(t.original), reverse=True)
