"""Term replacement endpoints — text in JSON, documents as uploads."""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from core.config import config
from core.documents import OUTPUT_REPORT, replace_in_file, replace_text
from core.ingestion.loader import guess_mime
from core.ingestion.term_sheet import load_terms
from core.replacement import (
    ConsistencyError,
    NoProcessableTextError,
    NothingToReplaceError,
    Term,
)
from models.schemas import MatchInfo, ReplaceTextRequest, ReplaceTextResponse
from api.deps import get_store, read_upload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["replace"])


@router.post("/replace/text", response_model=ReplaceTextResponse)
async def replace_text_endpoint(req: ReplaceTextRequest) -> ReplaceTextResponse:
    """Replace terms in plain text; uses the term library when no terms are sent."""
    if req.terms is None:
        terms = get_store().load_terms()
    else:
        terms = [Term(t.original, t.substitute) for t in req.terms]

    try:
        outcome = await asyncio.to_thread(replace_text, req.text, terms)
    except NoProcessableTextError as e:
        raise HTTPException(400, str(e))
    except ConsistencyError as e:
        logger.error(f"Replacement consistency fault: {e}")
        raise HTTPException(500, "Replacement failed. Check server logs for details.")

    matches = [
        MatchInfo(
            original=m.original,
            substitute=m.substitute,
            position=m.position,
            length=m.length,
            replaced_position=pos,
        )
        for m, pos in zip(outcome.trace.matches, outcome.replaced_positions)
    ]
    return ReplaceTextResponse(
        replaced_text=outcome.replaced_text,
        match_count=outcome.match_count,
        matches=matches,
        original_lines=outcome.original_lines,
        replaced_lines=outcome.replaced_lines,
        message=outcome.summary,
    )


@router.post("/replace/file")
async def replace_file_endpoint(
    document: UploadFile = File(...),
    terms: Optional[UploadFile] = File(None),
    output: str = Form(OUTPUT_REPORT),
) -> FileResponse:
    """Replace terms inside an uploaded document (.docx, .txt, .md).

    An optional term sheet (.xlsx, .csv) overrides the stored library for
    this request only.  ``output=report`` (default) returns a side-by-side
    comparison DOCX; ``output=replaced`` returns the replaced text itself.
    """
    filename = document.filename or "document.txt"
    data = await read_upload(document)

    if terms is not None:
        sheet = await read_upload(terms)
        try:
            dictionary = await asyncio.to_thread(load_terms, sheet, terms.filename or "terms.xlsx")
        except ValueError as e:
            raise HTTPException(400, str(e))
    else:
        dictionary = get_store().load_terms()

    try:
        out_bytes, out_name, outcome = await asyncio.to_thread(
            replace_in_file, data, filename, dictionary, output,
        )
    except NoProcessableTextError as e:
        raise HTTPException(400, str(e))
    except NothingToReplaceError as e:
        raise HTTPException(422, str(e))
    except ConsistencyError as e:
        logger.error(f"Replacement consistency fault for {filename}: {e}")
        raise HTTPException(500, "Replacement failed. Check server logs for details.")
    except ValueError as e:
        raise HTTPException(400, str(e))
    except Exception as e:
        logger.error(f"File replacement failed for {filename}: {e}")
        raise HTTPException(500, "Replacement failed. Check server logs for details.")

    config.temp_dir.mkdir(parents=True, exist_ok=True)
    tmp = Path(tempfile.mkdtemp(dir=str(config.temp_dir)))
    out_path = tmp / out_name
    out_path.write_bytes(out_bytes)

    def _cleanup() -> None:
        shutil.rmtree(tmp, ignore_errors=True)

    headers = {
        "X-Matches-Replaced": str(outcome.match_count),
        "Access-Control-Expose-Headers": "X-Matches-Replaced",
    }

    return FileResponse(
        str(out_path),
        media_type=guess_mime(out_name),
        filename=out_name,
        headers=headers,
        background=BackgroundTask(_cleanup),
    )
