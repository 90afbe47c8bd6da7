"""FastAPI application — main API for the termswap service."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import config
from core.persistence import TermStore
from api import deps
from api.csrf import CSRFMiddleware
from api.routers import replace, settings, terms

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

app = FastAPI(
    title="termswap",
    version=VERSION,
    description="Dictionary-driven term replacement with side-by-side highlighted reports",
)

app.add_middleware(CSRFMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Matches-Replaced"],
)

app.include_router(terms.router)
app.include_router(replace.router)
app.include_router(settings.router)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

@app.on_event("startup")
async def startup():
    """Initialize services on startup."""
    logger.info("Starting termswap...")
    deps.store = TermStore(config.data_dir / "storage")
    logger.info(f"Term library holds {deps.store.count()} term(s)")


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}
