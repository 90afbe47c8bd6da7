"""Term-sheet ingestion — spreadsheet rows into (original, substitute) terms.

Only the first two columns of each row are read.  A row becomes a term
when both cells are populated; anything else (headers with one cell, blank
rows, notes) is skipped.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from core.replacement.dictionary import Term

logger = logging.getLogger(__name__)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    # openpyxl yields ints/floats for numeric cells; 12.0 should read as "12"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _rows_to_terms(rows: Iterable[Iterable[Any]]) -> list[Term]:
    terms: list[Term] = []
    skipped = 0
    for row in rows:
        cells = [_cell_text(v) for v in list(row)[:2]]
        if len(cells) < 2 or not cells[0] or not cells[1]:
            skipped += 1
            continue
        terms.append(Term(cells[0], cells[1]))
    if skipped:
        logger.debug(f"Skipped {skipped} row(s) without two populated cells")
    return terms


def _load_xlsx(data: bytes) -> list[Term]:
    """XLSX — first worksheet only."""
    from openpyxl import load_workbook

    wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        return _rows_to_terms(ws.iter_rows(values_only=True))
    finally:
        wb.close()


def _load_csv(data: bytes) -> list[Term]:
    text = data.decode("utf-8-sig", errors="replace")
    return _rows_to_terms(csv.reader(io.StringIO(text)))


_HANDLERS: dict[str, Callable[[bytes], list[Term]]] = {
    ".xlsx": _load_xlsx,
    ".csv": _load_csv,
}

SUPPORTED_EXTENSIONS = set(_HANDLERS.keys())


def load_terms(data: bytes, filename: str) -> list[Term]:
    """
    Read substitution terms from a spreadsheet.

    Args:
        data: Raw file bytes.
        filename: Original filename (used to detect format).

    Returns:
        Terms in sheet order; may be empty.

    Raises:
        ValueError: for unsupported or unreadable files.
    """
    ext = Path(filename).suffix.lower()

    if ext == ".xls":
        raise ValueError(
            "Legacy .xls format is not supported. "
            "Please convert to .xlsx first (File → Save As in Excel)."
        )

    handler = _HANDLERS.get(ext)
    if handler is None:
        raise ValueError(
            f"Unsupported term sheet type '{ext}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )

    try:
        terms = handler(data)
    except Exception as e:
        logger.error(f"Term sheet parsing failed for {filename}: {e}")
        raise ValueError(f"Could not parse term sheet '{filename}'") from e

    logger.info(f"Loaded {len(terms)} term(s) from {filename}")
    return terms
