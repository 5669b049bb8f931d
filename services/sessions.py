"""Interview session lifecycle: question cycling, answer recording, feedback."""
from __future__ import annotations

import logging
from typing import List, Optional, Set

from pydantic import BaseModel

from agents.interviewer import EvaluationClient, EvaluationUnavailable
from config.settings import settings
from interview_session import (
    QuestionAnswer,
    RubricEval,
    Session,
    SessionStore,
    coerce_eval,
    default_eval,
)
from observability import log_event, span
from services.scoring import feedback_report

logger = logging.getLogger(__name__)


class NoActiveQuestion(RuntimeError):
    """An answer arrived while no question was waiting for one."""


class SessionFinished(RuntimeError):
    """The session was ended and accepts no further answers."""


class NextQuestion(BaseModel):
    wait: bool = False
    done: bool = False
    question: Optional[QuestionAnswer] = None


class AnswerOutcome(BaseModel):
    interviewer: Optional[str] = None
    eval: RubricEval


def _flatten_history(records: List[QuestionAnswer]) -> List[str]:
    return [f"{record.text} => {record.candidate_answer or ''}" for record in records]


class SessionLifecycle:  # Owns the question/answer state machine for every session
    def __init__(self, store: SessionStore, evaluator: EvaluationClient) -> None:
        self.store = store
        self.evaluator = evaluator
        self._generating: Set[str] = set()  # guarded by each session's lock

    def start_session(
        self,
        role: Optional[str] = None,
        level: Optional[str] = None,
        persona: Optional[str] = None,
    ) -> Session:
        """Create a session, filling unset configuration from settings."""

        session = self.store.create(
            role=role or settings.DEFAULT_ROLE,
            level=level or settings.DEFAULT_LEVEL,
            persona=persona or settings.DEFAULT_PERSONA,
        )
        log_event("session_created", session.id, role=session.role, level=session.level)
        return session

    def get_session(self, session_id: str) -> Session:
        return self.store.get(session_id)

    def request_next_question(self, session_id: str) -> NextQuestion:
        """Issue a new question unless one is still outstanding.

        The session is reserved under its lock, the question is generated with
        the lock released, and the record is appended under the lock again.
        Callers arriving while generation is in flight get a wait signal, so
        at most one question is ever outstanding, while feedback and end
        requests are not held up by the LLM call. Generation failures
        propagate and leave the session untouched.
        """

        with self.store.lock(session_id) as session:
            if session.finished:
                log_event("question_wait", session_id, status="finished")
                return NextQuestion(done=True)
            if session.waiting_for_answer or session_id in self._generating:
                log_event("question_wait", session_id, status="waiting")
                return NextQuestion(wait=True)
            self._generating.add(session_id)
            role, level, persona = session.role, session.level, session.persona
            history = session.history_pairs()

        try:
            with span("generate_next_question", session_id):
                text = self.evaluator.generate_next_question(
                    role=role,
                    level=level,
                    conversation_history=history,
                    persona=persona,
                )
            if not text or not text.strip():
                raise EvaluationUnavailable("evaluation client returned an empty question")

            with self.store.lock(session_id) as session:
                if session.finished:
                    log_event("question_wait", session_id, status="finished")
                    return NextQuestion(done=True)
                record = QuestionAnswer(id=f"dyn-{len(session.questions_asked) + 1}", text=text.strip())
                session.questions_asked.append(record)
                session.waiting_for_answer = True
                log_event("question_issued", session_id, question_id=record.id)
                return NextQuestion(question=record.model_copy(deep=True))
        finally:
            with self.store.lock(session_id):
                self._generating.discard(session_id)

    def submit_answer(self, session_id: str, text: str) -> AnswerOutcome:
        """Record the candidate's answer and attach the evaluation.

        The answer is stored and the waiting flag cleared before the evaluation
        call, so a slow or failing evaluator never blocks the next question.
        """

        with self.store.lock(session_id) as session:
            if session.finished:
                raise SessionFinished(session_id)
            record = session.active_question
            if record is None:
                raise NoActiveQuestion(session_id)
            record.candidate_answer = text
            session.waiting_for_answer = False
            history = _flatten_history(session.questions_asked[:-1])
            role, level, persona = session.role, session.level, session.persona
            question = record.text
        log_event("answer_recorded", session_id, question_id=record.id)

        interviewer: Optional[str] = None
        raw_eval = None
        try:
            with span("generate_interviewer_reply", session_id, question_id=record.id):
                reply = self.evaluator.generate_interviewer_reply(
                    role=role,
                    level=level,
                    question=question,
                    candidate_answer=text,
                    conversation_history=history,
                    persona=persona,
                )
            interviewer = reply.interviewer or None
            raw_eval = reply.eval
        except EvaluationUnavailable as exc:
            logger.warning("Evaluation unavailable for session %s: %s", session_id, exc)
            log_event(
                "evaluation_fallback",
                session_id,
                log_level=logging.WARNING,
                question_id=record.id,
                reason=str(exc),
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Evaluation client crashed for session %s", session_id)
            log_event(
                "evaluation_fallback",
                session_id,
                log_level=logging.ERROR,
                question_id=record.id,
                reason=type(exc).__name__,
            )

        evaluation = coerce_eval(raw_eval) if raw_eval is not None else default_eval()
        with self.store.lock(session_id):
            record.eval = evaluation
            record.interviewer_text = interviewer
        return AnswerOutcome(interviewer=interviewer, eval=evaluation.model_copy())

    def get_feedback(self, session_id: str) -> str:
        """Plain-text report over every asked question. Does not change state."""

        with self.store.lock(session_id) as session:
            report = feedback_report(session)
            count = len(session.questions_asked)
        log_event("feedback_built", session_id, outcome=f"{count} questions")
        return report

    def end_session(self, session_id: str) -> Session:
        """Mark the session finished. Safe to call more than once."""

        with self.store.lock(session_id) as session:
            if not session.finished:
                session.finished = True
                log_event("session_ended", session_id, outcome=f"{len(session.questions_asked)} questions")
            return session.model_copy(deep=True)


__all__ = [
    "AnswerOutcome",
    "NextQuestion",
    "NoActiveQuestion",
    "SessionFinished",
    "SessionLifecycle",
]
