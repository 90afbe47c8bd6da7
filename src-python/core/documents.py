"""File-based term replacement — document in, report or replaced text out.

Extracts text from the uploaded document and runs the replacement pipeline.
The result is either the annotated side-by-side DOCX report or the replaced
document text itself.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.ingestion.loader import extract_text
from core.rendering.docx_renderer import render_comparison_docx, render_replaced_text
from core.replacement import (
    NoProcessableTextError,
    NothingToReplaceError,
    ReplacementOutcome,
    Term,
    run_replacement,
)

logger = logging.getLogger(__name__)

# Output modes for replace_in_file
OUTPUT_REPORT = "report"        # Side-by-side comparison DOCX
OUTPUT_REPLACED = "replaced"    # The replaced text as a plain-text file
OUTPUT_MODES = (OUTPUT_REPORT, OUTPUT_REPLACED)

# Plain-text inputs keep their extension in "replaced" mode; anything else becomes .txt
_TEXT_SUFFIXES = {".txt", ".md"}


def replace_text(text: str, terms: list[Term]) -> ReplacementOutcome:
    """Run the pipeline, surfacing blank input as a caller-visible error."""
    if not text or not text.strip():
        raise NoProcessableTextError()
    return run_replacement(text, terms)


def replace_in_file(
    file_data: bytes,
    filename: str,
    terms: list[Term],
    output: str = OUTPUT_REPORT,
) -> tuple[bytes, str, ReplacementOutcome]:
    """
    Replace dictionary terms inside an uploaded document.

    Args:
        file_data: Raw file bytes.
        filename: Original filename (used to detect format).
        terms: Substitution terms, in any order.
        output: ``"report"`` for the comparison DOCX, ``"replaced"`` for the
            replaced text (``.txt``/``.md`` keep their extension, DOCX input
            comes back as ``.txt``).

    Returns:
        (output_bytes, output_filename, outcome)

    Raises:
        ValueError: unsupported or unreadable document, or unknown output mode.
        NoProcessableTextError: the document has no text.
        NothingToReplaceError: no terms given, or none of them occur.
    """
    if output not in OUTPUT_MODES:
        raise ValueError(f"Unknown output mode '{output}'. Supported: {', '.join(OUTPUT_MODES)}")
    if not terms:
        raise NothingToReplaceError("Nothing to replace: the term dictionary is empty")

    text = extract_text(file_data, filename)
    outcome = replace_text(text, terms)
    if outcome.match_count == 0:
        raise NothingToReplaceError()

    stem = Path(filename).stem
    if output == OUTPUT_REPLACED:
        suffix = Path(filename).suffix.lower()
        out_name = f"{stem}_replaced{suffix if suffix in _TEXT_SUFFIXES else '.txt'}"
        out_bytes = render_replaced_text(outcome.replaced_text)
    else:
        out_name = f"{stem}_replaced.docx"
        out_bytes = render_comparison_docx(
            outcome.original_lines,
            outcome.replaced_lines,
            title=f"{stem} — term replacement",
            summary=outcome.summary,
        )

    logger.info(
        f"File replacement: {filename} → {out_name}, "
        f"{outcome.match_count} occurrence(s) replaced",
        extra={
            "document": filename,
            "output_name": out_name,
            "term_count": len(terms),
            "match_count": outcome.match_count,
        },
    )
    return out_bytes, out_name, outcome
