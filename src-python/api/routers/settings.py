"""Application settings."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from core.config import HIGHLIGHT_COLORS, config

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["settings"])


# ---------------------------------------------------------------------------
# Settings update schema
# ---------------------------------------------------------------------------

class SettingsUpdate(BaseModel):
    """Validated partial settings update."""
    max_upload_mb: Optional[int] = Field(default=None, ge=1, le=1024)
    original_highlight: Optional[str] = None
    substitute_highlight: Optional[str] = None
    original_column_label: Optional[str] = Field(default=None, min_length=1, max_length=100)
    replaced_column_label: Optional[str] = Field(default=None, min_length=1, max_length=100)

    @field_validator("original_highlight", "substitute_highlight")
    @classmethod
    def _known_color(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.upper()
        if v not in HIGHLIGHT_COLORS:
            raise ValueError(f"Unknown highlight colour; choose one of {sorted(HIGHLIGHT_COLORS)}")
        return v


@router.get("/settings")
async def get_settings() -> dict[str, Any]:
    """Get current app settings (excludes internal paths)."""
    data = config.model_dump(mode="json")
    # Don't expose internal file-system paths to the frontend
    for key in ("data_dir", "temp_dir"):
        data.pop(key, None)
    return data


@router.patch("/settings")
async def update_settings(body: SettingsUpdate) -> dict[str, Any]:
    """Update app settings (partial update with Pydantic validation)."""
    applied = body.model_dump(exclude_none=True)
    for key, value in applied.items():
        setattr(config, key, value)

    if applied:
        config.save_user_settings()
        logger.info(f"Settings updated: {', '.join(sorted(applied))}")

    return {"status": "ok", "applied": applied}
