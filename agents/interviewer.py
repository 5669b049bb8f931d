"""LLM-backed interviewer: next-question generation and answer evaluation."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from agents.types import HistoryTurn, InterviewerReply, NextQuestionOut
from config import AppConfig, LlmRoute, load_app_registry, settings
from llm_gateway import LlmGatewayError, call

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parents[1]

QUESTION_KEY = "interviewer.next_question"
REPLY_KEY = "interviewer.reply"

PERSONA_STYLE: Dict[str, str] = {
    "efficient": "The candidate prefers a brisk pace. Keep wording tight and skip pleasantries.",
    "confused": "The candidate is easily lost. Use plain wording and ask about one thing at a time.",
    "chatty": "The candidate tends to ramble. Ask focused questions that invite a structured answer.",
}


class EvaluationUnavailable(RuntimeError):
    """The evaluation service failed, timed out or returned nothing usable."""


class EvaluationClient(Protocol):
    def generate_next_question(
        self,
        *,
        role: str,
        level: str,
        conversation_history: Sequence[Mapping[str, Optional[str]]],
        persona: Optional[str] = None,
    ) -> str: ...

    def generate_interviewer_reply(
        self,
        *,
        role: str,
        level: str,
        question: str,
        candidate_answer: str,
        conversation_history: Sequence[str],
        persona: Optional[str] = None,
    ) -> InterviewerReply: ...


def _role_label(role: str) -> str:
    return role.replace("_", " ").strip() or "generalist"


def _persona_line(persona: Optional[str]) -> str:
    if not persona:
        return ""
    return PERSONA_STYLE.get(persona.lower(), f"Candidate persona: {persona}.")


def _limit(items: Sequence[Any], limit: int) -> Sequence[Any]:
    if limit and len(items) > limit:
        return items[-limit:]
    return items


def build_question_task(
    *,
    role: str,
    level: str,
    history: Sequence[HistoryTurn],
    persona: Optional[str] = None,
) -> str:
    """Prompt asking for exactly one new interview question."""

    if history:
        lines = []
        for index, turn in enumerate(history, start=1):
            lines.append(f"Q{index}: {turn.question}")
            lines.append(f"A{index}: {turn.answer or '(no answer yet)'}")
        transcript = "\n".join(lines)
    else:
        transcript = "(no questions asked yet)"
    return dedent(
        """
        You are interviewing a {level} level {role} candidate in a mock interview.
        {persona}
        Conversation so far:
        {transcript}

        Ask the next interview question. Do not repeat a question already asked.
        Build on earlier answers where useful and keep it to one or two sentences.
        Respond with a JSON object: {{"question": "<the question>"}}.
        """
    ).format(
        level=level,
        role=_role_label(role),
        persona=_persona_line(persona),
        transcript=transcript,
    ).strip()


def build_reply_task(
    *,
    role: str,
    level: str,
    question: str,
    candidate_answer: str,
    history: Sequence[str],
    persona: Optional[str] = None,
) -> str:
    """Prompt asking for interviewer commentary and a four-part rubric."""

    earlier = "\n".join(f"- {line}" for line in history) if history else "- (none)"
    return dedent(
        """
        You are interviewing a {level} level {role} candidate in a mock interview.
        {persona}
        Earlier exchanges (question => answer):
        {earlier}

        Current question: {question}
        Candidate answer: {answer}

        Reply briefly as the interviewer, then grade the answer.
        Respond with a JSON object:
        - interviewer: one or two sentences of spoken reply.
        - eval: object with integer scores from 0 to 5 for communication, technical,
          structure and confidence, plus notes with one or two sentences of advice.
        """
    ).format(
        level=level,
        role=_role_label(role),
        persona=_persona_line(persona),
        earlier=earlier,
        question=question,
        answer=candidate_answer,
    ).strip()


class LlmEvaluationClient:  # Evaluation client backed by configured LLM routes
    def __init__(
        self,
        *,
        config_path: Optional[Path] = None,
        routes: Optional[Dict[str, LlmRoute]] = None,
        app_config: Optional[AppConfig] = None,
    ) -> None:
        path = Path(config_path or settings.CONFIG_PATH)
        self._config_path = path if path.is_absolute() else ROOT_DIR / path
        self._routes = routes
        self._app_config = app_config
        self._load_guard = threading.Lock()

    def _route(self, key: str) -> LlmRoute:  # Resolve routes lazily on first use
        with self._load_guard:
            if self._routes is None:
                try:
                    self._app_config, self._routes = load_app_registry(
                        self._config_path, (QUESTION_KEY, REPLY_KEY)
                    )
                except (OSError, ValueError, KeyError) as exc:
                    logger.error("Unable to load LLM routes from %s: %s", self._config_path, exc)
                    raise EvaluationUnavailable(f"LLM routes unavailable: {exc}") from exc
        if key not in self._routes:
            raise EvaluationUnavailable(f"No LLM route bound for '{key}'")
        return self._routes[key]

    def _history_limit(self) -> int:
        return self._app_config.prompts.history_limit if self._app_config else 0

    def _notes_limit(self) -> int:
        return self._app_config.prompts.notes_max_chars if self._app_config else 400

    def generate_next_question(
        self,
        *,
        role: str,
        level: str,
        conversation_history: Sequence[Mapping[str, Optional[str]]],
        persona: Optional[str] = None,
    ) -> str:
        route = self._route(QUESTION_KEY)
        turns = [HistoryTurn(question=item.get("question") or "", answer=item.get("answer")) for item in conversation_history]
        task = build_question_task(
            role=role,
            level=level,
            history=_limit(turns, self._history_limit()),
            persona=persona,
        )
        try:
            result = call(task, NextQuestionOut, cfg=route)
        except LlmGatewayError as exc:
            raise EvaluationUnavailable(f"question generation failed: {exc}") from exc
        if not result.question:
            raise EvaluationUnavailable("question generation returned an empty question")
        return result.question

    def generate_interviewer_reply(
        self,
        *,
        role: str,
        level: str,
        question: str,
        candidate_answer: str,
        conversation_history: Sequence[str],
        persona: Optional[str] = None,
    ) -> InterviewerReply:
        route = self._route(REPLY_KEY)
        task = build_reply_task(
            role=role,
            level=level,
            question=question,
            candidate_answer=candidate_answer,
            history=_limit(list(conversation_history), self._history_limit()),
            persona=persona,
        )
        try:
            reply = call(task, InterviewerReply, cfg=route)
        except LlmGatewayError as exc:
            raise EvaluationUnavailable(f"answer evaluation failed: {exc}") from exc
        if reply.eval and isinstance(reply.eval.get("notes"), str):
            reply.eval["notes"] = reply.eval["notes"][: self._notes_limit()]
        return reply


__all__ = [
    "EvaluationClient",
    "EvaluationUnavailable",
    "LlmEvaluationClient",
    "PERSONA_STYLE",
    "QUESTION_KEY",
    "REPLY_KEY",
    "build_question_task",
    "build_reply_task",
]
