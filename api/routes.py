"""FastAPI routes for interview session control."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from agents.interviewer import EvaluationUnavailable
from api.schemas import AnswerReq, AnswerResp, CreateSessionReq, NextQuestionResp, SessionResp
from config.settings import settings
from interview_session import SessionNotFound
from services.sessions import NoActiveQuestion, SessionFinished, SessionLifecycle


logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_PREFIX}/session")


def get_lifecycle(request: Request) -> SessionLifecycle:
    return request.app.state.lifecycle


def _not_found(exc: SessionNotFound) -> HTTPException:
    logger.info("Unknown session requested: %s", exc.session_id)
    return HTTPException(status_code=404, detail="session not found")


@router.post("", response_model=SessionResp)
def create_session(
    req: Optional[CreateSessionReq] = None,
    lifecycle: SessionLifecycle = Depends(get_lifecycle),
) -> SessionResp:
    req = req or CreateSessionReq()
    session = lifecycle.start_session(role=req.role, level=req.level, persona=req.persona)
    return SessionResp(session=session)


@router.get("/{session_id}/next", response_model=NextQuestionResp)
def next_question(session_id: str, lifecycle: SessionLifecycle = Depends(get_lifecycle)) -> NextQuestionResp:
    try:
        result = lifecycle.request_next_question(session_id)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    except EvaluationUnavailable as exc:
        logger.warning("Question generation failed for %s: %s", session_id, exc)
        raise HTTPException(status_code=502, detail="question generation unavailable") from exc
    return NextQuestionResp(wait=result.wait, done=result.done, question=result.question)


@router.post("/{session_id}/answer", response_model=AnswerResp)
def submit_answer(
    session_id: str,
    req: AnswerReq,
    lifecycle: SessionLifecycle = Depends(get_lifecycle),
) -> AnswerResp:
    try:
        outcome = lifecycle.submit_answer(session_id, req.text)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    except NoActiveQuestion as exc:
        raise HTTPException(status_code=400, detail="no active question") from exc
    except SessionFinished as exc:
        raise HTTPException(status_code=409, detail="session already finished") from exc
    return AnswerResp(interviewer=outcome.interviewer, eval=outcome.eval)


@router.post("/{session_id}/end", response_model=SessionResp)
def end_session(session_id: str, lifecycle: SessionLifecycle = Depends(get_lifecycle)) -> SessionResp:
    try:
        session = lifecycle.end_session(session_id)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    return SessionResp(session=session)


@router.get("/{session_id}/feedback", response_class=PlainTextResponse)
def feedback(session_id: str, lifecycle: SessionLifecycle = Depends(get_lifecycle)) -> PlainTextResponse:
    try:
        report = lifecycle.get_feedback(session_id)
    except SessionNotFound:
        logger.info("Feedback requested for unknown session %s", session_id)
        return PlainTextResponse("Session not found", status_code=404)
    return PlainTextResponse(report)
