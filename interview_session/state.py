"""Session record model shared by the store, lifecycle service and API."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

RUBRIC_DIMENSIONS = ("communication", "technical", "structure", "confidence")
NO_EVALUATION_NOTE = "No evaluation available."
NO_ANSWER_TEXT = "No answer provided."
MAX_SCORE = 5

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)

Score = Union[int, float]


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class RubricEval(BaseModel):
    """Four-dimension rubric plus free-text notes."""

    model_config = _WIRE_CONFIG

    communication: Score = 0
    technical: Score = 0
    structure: Score = 0
    confidence: Score = 0
    notes: str = NO_EVALUATION_NOTE

    @field_validator(*RUBRIC_DIMENSIONS, mode="before")
    @classmethod
    def _score(cls, value: Any) -> Score:
        # Unreadable scores fall to 0 on their own; fractions are kept unrounded.
        if value is None or isinstance(value, bool):
            return 0
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return 0
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            return 0
        value = max(0, min(MAX_SCORE, value))
        return int(value) if float(value).is_integer() else float(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, value: Any) -> str:
        if value is None:
            return NO_EVALUATION_NOTE
        text = str(value).strip()
        return text or NO_EVALUATION_NOTE

    def scores(self) -> Dict[str, Score]:
        return {name: getattr(self, name) for name in RUBRIC_DIMENSIONS}


def default_eval() -> RubricEval:
    """Zero-filled rubric used whenever no usable evaluation exists."""

    return RubricEval()


def coerce_eval(raw: Any) -> RubricEval:
    """Build a complete rubric from whatever the evaluation client returned.

    Missing or unreadable dimensions default to zero one at a time and
    missing notes to the "no evaluation" note. Only a payload that is not a
    mapping at all yields :func:`default_eval`.
    """

    if raw is None:
        return default_eval()
    if isinstance(raw, RubricEval):
        return raw.model_copy()
    if not isinstance(raw, dict):
        return default_eval()
    try:
        return RubricEval.model_validate(raw)
    except (ValidationError, ValueError):
        return default_eval()


class QuestionAnswer(BaseModel):
    """One generated question and, once recorded, the candidate's answer."""

    model_config = _WIRE_CONFIG

    id: str
    text: str
    type: Literal["dynamic"] = "dynamic"
    candidate_answer: Optional[str] = None
    eval: Optional[RubricEval] = None
    interviewer_text: Optional[str] = None

    @property
    def answered(self) -> bool:
        return self.candidate_answer is not None


class Session(BaseModel):
    """One interview attempt held in process memory."""

    model_config = _WIRE_CONFIG

    id: str
    role: str
    level: str
    persona: str
    questions_asked: List[QuestionAnswer] = Field(default_factory=list)
    waiting_for_answer: bool = False
    finished: bool = False
    created_at: str = Field(default_factory=_utcnow)

    @property
    def active_question(self) -> Optional[QuestionAnswer]:
        """The last question if it still waits for an answer."""

        if self.questions_asked and not self.questions_asked[-1].answered:
            return self.questions_asked[-1]
        return None

    def history_pairs(self) -> List[Dict[str, Optional[str]]]:
        return [{"question": q.text, "answer": q.candidate_answer} for q in self.questions_asked]


__all__ = [
    "MAX_SCORE",
    "NO_ANSWER_TEXT",
    "NO_EVALUATION_NOTE",
    "RUBRIC_DIMENSIONS",
    "QuestionAnswer",
    "RubricEval",
    "Session",
    "coerce_eval",
    "default_eval",
]
