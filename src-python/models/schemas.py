"""Pydantic data models for the term-replacement service."""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class HighlightRole(str, enum.Enum):
    """Which styling the renderer should apply to a highlighted span."""
    ORIGINAL = "original"        # Source term in the original text
    SUBSTITUTE = "substitute"    # Replacement term in the replaced text


# ---------------------------------------------------------------------------
# Annotated output
# ---------------------------------------------------------------------------

class HighlightSpan(BaseModel):
    """A highlighted range, as offsets relative to the start of its line."""
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    role: HighlightRole


class AnnotatedLine(BaseModel):
    """One line of original or replaced text with its highlight spans."""
    text: str
    highlight_spans: list[HighlightSpan] = []


# ---------------------------------------------------------------------------
# Term library
# ---------------------------------------------------------------------------

class TermEntry(BaseModel):
    """A single substitution rule as exchanged over the API."""
    original: str = Field(min_length=1)
    substitute: str = ""


class TermListResponse(BaseModel):
    terms: list[TermEntry]
    count: int


class TermUploadResponse(BaseModel):
    filename: str
    count: int
    message: str


# ---------------------------------------------------------------------------
# Replacement
# ---------------------------------------------------------------------------

class ReplaceTextRequest(BaseModel):
    text: str
    # None = use the stored term library
    terms: Optional[list[TermEntry]] = None


class MatchInfo(BaseModel):
    """An accepted match with its position in both coordinate spaces."""
    original: str
    substitute: str
    position: int                     # Offset into the original text
    length: int
    replaced_position: int            # Offset into the replaced text


class ReplaceTextResponse(BaseModel):
    replaced_text: str
    match_count: int
    matches: list[MatchInfo]
    original_lines: list[AnnotatedLine]
    replaced_lines: list[AnnotatedLine]
    message: str
