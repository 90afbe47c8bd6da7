"""Comparison document rendering — annotated lines to a side-by-side DOCX.

Pure functions of their inputs: nothing here knows how the lines were
produced, and the replacement engine knows nothing about DOCX.
"""

from __future__ import annotations

import io
import logging
from itertools import zip_longest
from typing import Optional

from docx import Document
from docx.enum.text import WD_COLOR_INDEX
from docx.shared import Pt

from core.config import config
from models.schemas import AnnotatedLine, HighlightRole

logger = logging.getLogger(__name__)


def _highlight_index(name: str) -> WD_COLOR_INDEX:
    try:
        return getattr(WD_COLOR_INDEX, name.upper())
    except AttributeError:
        logger.warning(f"Unknown highlight colour {name!r}, falling back to YELLOW")
        return WD_COLOR_INDEX.YELLOW


def _fill_paragraph(paragraph, line: Optional[AnnotatedLine], colors: dict[HighlightRole, WD_COLOR_INDEX]) -> None:
    """Write *line* into *paragraph*, one run per plain or highlighted segment."""
    if line is None:
        return
    cursor = 0
    for span in line.highlight_spans:
        if span.start > cursor:
            paragraph.add_run(line.text[cursor:span.start])
        run = paragraph.add_run(line.text[span.start:span.end])
        run.font.highlight_color = colors[span.role]
        if span.role == HighlightRole.SUBSTITUTE:
            run.bold = True
        cursor = span.end
    if cursor < len(line.text):
        paragraph.add_run(line.text[cursor:])


def render_comparison_docx(
    original_lines: list[AnnotatedLine],
    replaced_lines: list[AnnotatedLine],
    title: str = "Term replacement report",
    summary: str = "",
) -> bytes:
    """Build a DOCX with a two-column table: original text | replaced text.

    Lines are paired by index; one table row per pair.
    """
    colors = {
        HighlightRole.ORIGINAL: _highlight_index(config.original_highlight),
        HighlightRole.SUBSTITUTE: _highlight_index(config.substitute_highlight),
    }

    doc = Document()
    doc.add_heading(title, level=1)
    if summary:
        doc.add_paragraph(summary)

    table = doc.add_table(rows=1, cols=2)
    table.style = "Table Grid"
    header = table.rows[0].cells
    for cell, label in zip(header, (config.original_column_label, config.replaced_column_label)):
        run = cell.paragraphs[0].add_run(label)
        run.bold = True

    for orig, repl in zip_longest(original_lines, replaced_lines):
        cells = table.add_row().cells
        _fill_paragraph(cells[0].paragraphs[0], orig, colors)
        _fill_paragraph(cells[1].paragraphs[0], repl, colors)

    for row in table.rows:
        for cell in row.cells:
            for para in cell.paragraphs:
                for run in para.runs:
                    run.font.size = Pt(10)

    buf = io.BytesIO()
    doc.save(buf)
    logger.info(f"Rendered comparison DOCX with {len(table.rows) - 1} line pair(s)")
    return buf.getvalue()


def render_replaced_text(replaced_text: str) -> bytes:
    """Plain-text rendering of the replaced document."""
    return replaced_text.encode("utf-8")
