"""Document text extraction — turns uploaded files into plain text.

The replacement engine only ever sees plain text; this module is the
boundary that knows about container formats.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# Supported extension → MIME mapping
_MIME_MAP: dict[str, str] = {
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".docx": DOCX_MIME,
}


def guess_mime(filename: str) -> str:
    return _MIME_MAP.get(Path(filename).suffix.lower(), "application/octet-stream")


# ---------------------------------------------------------------------------
# Per-format handlers
# ---------------------------------------------------------------------------

def _extract_txt(data: bytes) -> str:
    """Plain text — UTF-8, a leading BOM is dropped."""
    return data.decode("utf-8-sig", errors="replace")


def _extract_docx(data: bytes) -> str:
    """DOCX — one line per paragraph, body paragraphs and tables in order.

    python-docx exposes paragraphs and tables as separate lists, but the
    underlying XML has them interleaved.  Walk the body children so the
    text comes out in reading order.
    """
    from docx import Document
    from docx.oxml.ns import qn
    from docx.table import Table
    from docx.text.paragraph import Paragraph

    doc = Document(io.BytesIO(data))
    lines: list[str] = []

    def _walk_table(table: Table) -> None:
        seen: set = set()
        for row in table.rows:
            for cell in row.cells:
                # Merged cells are repeated once per spanned grid column
                if cell._tc in seen:
                    continue
                seen.add(cell._tc)
                for para in cell.paragraphs:
                    lines.append(para.text)
                for nested in cell.tables:
                    _walk_table(nested)

    for child in doc.element.body.iterchildren():
        if child.tag == qn("w:p"):
            lines.append(Paragraph(child, doc).text)
        elif child.tag == qn("w:tbl"):
            _walk_table(Table(child, doc))

    return "\n".join(lines)


_HANDLERS: dict[str, Callable[[bytes], str]] = {
    ".txt": _extract_txt,
    ".md": _extract_txt,
    ".docx": _extract_docx,
}

SUPPORTED_EXTENSIONS = set(_HANDLERS.keys())


def extract_text(data: bytes, filename: str) -> str:
    """
    Extract plain text from an uploaded document.

    Args:
        data: Raw file bytes.
        filename: Original filename (used to detect format).

    Returns:
        The document text with ``\\n`` between paragraphs.

    Raises:
        ValueError: for unsupported or unreadable files.
    """
    ext = Path(filename).suffix.lower()

    if ext == ".doc":
        raise ValueError(
            "Legacy .doc format is not supported. "
            "Please convert to .docx first (File → Save As in Word)."
        )

    handler = _HANDLERS.get(ext)
    if handler is None:
        raise ValueError(
            f"Unsupported file type '{ext}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )

    try:
        text = handler(data)
    except ValueError:
        raise
    except Exception as e:
        logger.error(f"Text extraction failed for {filename}: {e}")
        raise ValueError(f"Could not read '{filename}': the file appears to be damaged") from e

    logger.info(f"Extracted {len(text)} chars from {filename}")
    return text
