"""Pydantic schemas for the interview session API."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from interview_session import QuestionAnswer, RubricEval, Session


class CreateSessionReq(BaseModel):
    role: Optional[str] = Field(default=None, max_length=100)
    level: Optional[str] = Field(default=None, max_length=50)
    persona: Optional[str] = Field(default=None, max_length=50)


class AnswerReq(BaseModel):
    text: str = Field(max_length=20000)


class SessionResp(BaseModel):
    session: Session


class NextQuestionResp(BaseModel):
    wait: bool = False
    done: bool = False
    question: Optional[QuestionAnswer] = None


class AnswerResp(BaseModel):
    interviewer: Optional[str] = None
    eval: RubricEval
