"""Shared type definitions for the interviewer agent."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class HistoryTurn(BaseModel):
    question: str
    answer: Optional[str] = None


class NextQuestionOut(BaseModel):
    question: str

    @field_validator("question")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @classmethod
    def from_raw_content(cls, content: str) -> "NextQuestionOut":
        # Models sometimes answer with the bare question instead of JSON.
        text = content.strip()
        if not text or text.startswith("{"):
            raise ValueError("no plain-text question in reply")
        return cls(question=text)


class InterviewerReply(BaseModel):
    """Commentary plus a loosely typed rubric; the eval is normalised downstream."""

    interviewer: str = Field(default="", description="Short spoken reply to the candidate")
    eval: Optional[Dict[str, Any]] = Field(
        default=None,
        description="communication, technical, structure, confidence as integers 0-5, plus notes",
    )
