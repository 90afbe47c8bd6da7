"""Term library endpoints — list, upload, add, clear."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from core.ingestion.term_sheet import load_terms
from models.schemas import TermEntry, TermListResponse, TermUploadResponse
from api.deps import get_store, read_upload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["terms"])


@router.get("/terms", response_model=TermListResponse)
async def list_terms() -> TermListResponse:
    """Return the stored term library, longest original first."""
    terms = get_store().load_terms()
    return TermListResponse(
        terms=[TermEntry(original=t.original, substitute=t.substitute) for t in terms],
        count=len(terms),
    )


@router.post("/terms/upload", response_model=TermUploadResponse)
async def upload_terms(file: UploadFile = File(...)) -> TermUploadResponse:
    """Replace the term library with the rows of an uploaded sheet (.xlsx, .csv)."""
    filename = file.filename or "terms.xlsx"
    data = await read_upload(file)

    try:
        terms = await asyncio.to_thread(load_terms, data, filename)
    except ValueError as e:
        raise HTTPException(400, str(e))

    if not terms:
        raise HTTPException(400, "No valid terms found: each row needs an original and a substitute")

    count = get_store().replace_terms(terms)
    return TermUploadResponse(
        filename=filename,
        count=count,
        message=f"Term library updated with {count} term(s)",
    )


@router.post("/terms")
async def add_term(entry: TermEntry) -> dict[str, object]:
    """Add one term, or overwrite the substitute of an existing original."""
    created = get_store().add_term(entry.original, entry.substitute)
    return {"status": "ok", "created": created}


@router.delete("/terms")
async def clear_terms() -> dict[str, str]:
    get_store().clear()
    return {"status": "ok", "message": "Term library cleared"}
