import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from agents.interviewer import EvaluationUnavailable
from agents.types import InterviewerReply
from interview_session import SessionStore
from services.sessions import SessionLifecycle


DEFAULT_EVAL = {
    "communication": 4,
    "technical": 3,
    "structure": 4,
    "confidence": 3,
    "notes": "Clear answer; mention complexity.",
}


class FakeEvaluator:
    """Scripted stand-in for the LLM evaluation client."""

    def __init__(self) -> None:
        self.questions: List[str] = []
        self.evals: List[Optional[Dict[str, Any]]] = []
        self.interviewer = "Thanks, noted."
        self.fail_questions = False
        self.fail_replies = False
        self.question_calls: List[Dict[str, Any]] = []
        self.reply_calls: List[Dict[str, Any]] = []

    def generate_next_question(self, *, role, level, conversation_history, persona=None) -> str:
        self.question_calls.append(
            {"role": role, "level": level, "history": list(conversation_history), "persona": persona}
        )
        if self.fail_questions:
            raise EvaluationUnavailable("question service down")
        if self.questions:
            return self.questions.pop(0)
        return f"Question {len(self.question_calls)}: how would you design a cache?"

    def generate_interviewer_reply(
        self, *, role, level, question, candidate_answer, conversation_history, persona=None
    ) -> InterviewerReply:
        self.reply_calls.append(
            {
                "role": role,
                "level": level,
                "question": question,
                "answer": candidate_answer,
                "history": list(conversation_history),
                "persona": persona,
            }
        )
        if self.fail_replies:
            raise EvaluationUnavailable("evaluation service down")
        raw = self.evals.pop(0) if self.evals else dict(DEFAULT_EVAL)
        return InterviewerReply(interviewer=self.interviewer, eval=raw)


@pytest.fixture
def fake_evaluator() -> FakeEvaluator:
    return FakeEvaluator()


@pytest.fixture
def lifecycle(fake_evaluator) -> SessionLifecycle:
    return SessionLifecycle(SessionStore(), fake_evaluator)
