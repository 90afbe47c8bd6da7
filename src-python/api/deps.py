"""Shared state and helpers used by all API routers."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException, UploadFile

from core.config import config
from core.persistence import TermStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Singleton state  (set by server.startup, created lazily otherwise)
# ---------------------------------------------------------------------------
store: Optional[TermStore] = None


# ---------------------------------------------------------------------------
# Convenience accessors
# ---------------------------------------------------------------------------

def get_store() -> TermStore:
    """Return the term store, creating it on first use."""
    global store
    if store is None:
        store = TermStore(config.data_dir / "storage")
    return store


async def read_upload(file: UploadFile) -> bytes:
    """Read an uploaded file, enforcing the configured size limit (413)."""
    data = await file.read()
    if len(data) > config.max_upload_bytes:
        logger.warning(f"Rejected upload {file.filename}: {len(data)} bytes")
        raise HTTPException(
            413,
            f"File too large. Maximum size is {config.max_upload_mb} MB.",
        )
    return data
