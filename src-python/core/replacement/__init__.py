"""Term-replacement engine."""

from core.replacement.dictionary import Term, by_priority, normalize_dictionary
from core.replacement.errors import (
    ConsistencyError,
    NoProcessableTextError,
    NothingToReplaceError,
    ReplacementError,
)
from core.replacement.pipeline import ReplacementOutcome, run_replacement
from core.replacement.projection import project_annotations, replaced_positions
from core.replacement.resolver import Match, find_matches
from core.replacement.substitution import ReplacementTrace, apply_matches

__all__ = [
    "ConsistencyError",
    "Match",
    "NoProcessableTextError",
    "NothingToReplaceError",
    "ReplacementError",
    "ReplacementOutcome",
    "ReplacementTrace",
    "Term",
    "apply_matches",
    "by_priority",
    "find_matches",
    "normalize_dictionary",
    "project_annotations",
    "replaced_positions",
    "run_replacement",
]
