"""Exceptions raised by the term-replacement engine and its callers."""

from __future__ import annotations


class ReplacementError(Exception):
    """Base class for term-replacement errors."""


class ConsistencyError(ReplacementError, RuntimeError):
    """A match set broke an engine invariant (overlap, order, or content).

    Signals a resolver bug, never bad user input.
    """


class NoProcessableTextError(ReplacementError, ValueError):
    def __init__(self, message: str = "No processable text found in the document"):
        super().__init__(message)


class NothingToReplaceError(ReplacementError, ValueError):
    def __init__(self, message: str = "Nothing to replace: no dictionary term occurs in the text"):
        super().__init__(message)
