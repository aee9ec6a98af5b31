"""Errors surfaced by the interview engine to its callers."""
from __future__ import annotations


class EngineError(Exception):
    """Base class for caller-visible engine failures."""


class ValidationError(EngineError):
    """Caller input was rejected; nothing was mutated."""


class InterviewCompletedError(ValidationError):
    """The interview is completed and accepts no further transitions."""


class NotFoundError(EngineError):
    """No candidate exists for the given id."""


class PersistenceError(EngineError):
    """The storage layer failed; no partial state was committed."""


__all__ = [
    "EngineError",
    "ValidationError",
    "InterviewCompletedError",
    "NotFoundError",
    "PersistenceError",
]
