from __future__ import annotations  # Interview session package exports

from .state import (
    NO_ANSWER_TEXT,
    NO_EVALUATION_NOTE,
    RUBRIC_DIMENSIONS,
    QuestionAnswer,
    RubricEval,
    Session,
    coerce_eval,
    default_eval,
)
from .store import SessionNotFound, SessionStore

__all__ = [
    "NO_ANSWER_TEXT",
    "NO_EVALUATION_NOTE",
    "RUBRIC_DIMENSIONS",
    "QuestionAnswer",
    "RubricEval",
    "Session",
    "SessionNotFound",
    "SessionStore",
    "coerce_eval",
    "default_eval",
]
