"""Persistence layer."""

from core.persistence.store import TermStore

__all__ = ["TermStore"]
