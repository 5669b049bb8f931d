"""Client-side orchestration of one interview: status, transcript, round trips."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

from config.settings import settings
from interview_client.api import BackendClient, Payload, is_failure, is_unreachable

logger = logging.getLogger(__name__)

Status = Literal["idle", "creating", "in-progress", "finalizing", "finished"]
Speaker = Literal["system", "interviewer", "candidate"]

BACKEND_DOWN_NOTICE = "Backend not responding."
REQUEST_FAILED_NOTICE = "Request failed: {detail}"


class Message(BaseModel):
    role: Speaker
    text: str


class InterviewApp:
    """Drives the backend for one candidate and keeps the display transcript.

    Interviewer commentary returned with an evaluation is never shown; after
    every answer the next question is requested straight away.
    """

    def __init__(self, api: BackendClient) -> None:
        self.api = api
        self.status: Status = "idle"
        self.session: Optional[Dict[str, Any]] = None
        self.current_question: Optional[Dict[str, Any]] = None
        self.waiting = False
        self.feedback: Optional[str] = None
        self._messages: List[Message] = []

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def session_id(self) -> Optional[str]:
        return self.session.get("id") if self.session else None

    @property
    def accepts_input(self) -> bool:
        return self.status == "in-progress" and not self.waiting

    def _push(self, role: Speaker, text: str) -> None:
        self._messages.append(Message(role=role, text=text))

    def push_system(self, text: str) -> None:
        self._push("system", text)

    def _call(self, result: Payload) -> Optional[Payload]:
        if is_unreachable(result):
            self.push_system(BACKEND_DOWN_NOTICE)
            return None
        if is_failure(result):
            logger.error("Backend rejected request: %s", result)
            detail = result.get("detail") if isinstance(result, dict) else None
            self.push_system(REQUEST_FAILED_NOTICE.format(detail=detail or "unknown error"))
            return None
        return result

    def start_session(
        self,
        role: Optional[str] = None,
        level: Optional[str] = None,
        persona: Optional[str] = None,
    ) -> bool:
        if self.status in ("creating", "in-progress"):
            return False
        self.status = "creating"
        self._messages = []
        self.feedback = None
        self.current_question = None

        resp = self._call(
            self.api.create_session(
                role or settings.DEFAULT_ROLE,
                level or settings.DEFAULT_LEVEL,
                persona or settings.DEFAULT_PERSONA,
            )
        )
        if not isinstance(resp, dict) or not resp.get("session"):
            self.status = "idle"
            return False

        self.session = resp["session"]
        self.push_system(f"Session created for {self.session.get('role')}. Hello, we'll start now.")
        self.status = "in-progress"
        self.fetch_next_question()
        return True

    def fetch_next_question(self) -> Optional[Dict[str, Any]]:
        if not self.session_id:
            return None
        nxt = self._call(self.api.get_next_question(self.session_id))
        if not isinstance(nxt, dict):
            return None

        if nxt.get("done"):
            self.current_question = None
            self.push_system("No more questions available.")
            return None
        question = nxt.get("question")
        if not question:
            # Still waiting on an earlier question; keep showing it.
            return self.current_question

        last_asked = next((m for m in reversed(self._messages) if m.role == "interviewer"), None)
        self.current_question = question
        if last_asked is None or last_asked.text.strip() != str(question.get("text", "")).strip():
            self._push("interviewer", question.get("text", ""))
        return question

    def handle_candidate_answer(self, text: str) -> bool:
        if not self.session_id:
            self.push_system("Start a session first.")
            return False
        if self.waiting or self.status != "in-progress":
            return False
        text = text.strip()
        if not text:
            return False

        self._push("candidate", text)
        self.waiting = True
        try:
            # Commentary in the response is deliberately not displayed.
            self._call(self.api.submit_answer(self.session_id, text))
            self.fetch_next_question()
        finally:
            self.waiting = False
        return True

    def end_and_get_feedback(self) -> Optional[str]:
        if not self.session_id:
            self.push_system("No active session.")
            return None

        self.status = "finalizing"
        self.push_system("Thanks, generating your feedback now. Please wait...")
        self._call(self.api.end_session(self.session_id))

        fb = self._call(self.api.get_feedback(self.session_id))
        if fb is None:
            self.push_system("Failed to generate feedback.")
            self.status = "finished"
            return None

        report = fb.strip() if isinstance(fb, str) else str(fb)
        self.feedback = report
        self.push_system(report)
        self.status = "finished"
        return report


__all__ = ["BACKEND_DOWN_NOTICE", "InterviewApp", "Message", "REQUEST_FAILED_NOTICE", "Status"]
