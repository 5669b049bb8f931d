from __future__ import annotations  # FastAPI server exposing the interview session API

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from agents.interviewer import LlmEvaluationClient
from api.routes import router as session_router
from config.settings import settings
from interview_session import SessionStore
from services.sessions import SessionLifecycle


logger = logging.getLogger(__name__)


def build_lifecycle() -> SessionLifecycle:  # Default wiring: fresh in-memory store plus LLM evaluator
    return SessionLifecycle(SessionStore(), LlmEvaluationClient())


def create_app(lifecycle: Optional[SessionLifecycle] = None) -> FastAPI:  # Build the API around one lifecycle service
    app = FastAPI(title="Interview Practice Partner API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.lifecycle = lifecycle or build_lifecycle()
    app.include_router(session_router)

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:  # Liveness banner
        return "Interview Agent Backend"

    return app


app = create_app()


def main() -> None:  # Run the API with uvicorn
    logger.info("Backend running on http://%s:%d", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
