import argparse
import io

from fastapi.testclient import TestClient

from api_server import create_app
from interview_client import BackendClient, InterviewApp
from interview_client.cli import run
from interview_session import SessionStore
from services.sessions import SessionLifecycle


def _wired(fake_evaluator):
    lifecycle = SessionLifecycle(SessionStore(), fake_evaluator)
    http = TestClient(create_app(lifecycle))
    api = BackendClient("http://testserver/api", http_client=http)
    return lifecycle, InterviewApp(api)


def test_full_interview_through_client(fake_evaluator):
    fake_evaluator.questions = ["Design a URL shortener.", "How would you scale it?"]
    fake_evaluator.evals = [
        {"communication": 4, "technical": 5, "structure": 3, "confidence": 4, "notes": "Good depth."},
        {"communication": 2, "technical": 3, "structure": 3, "confidence": 2},
    ]
    lifecycle, app = _wired(fake_evaluator)

    assert app.start_session(role="software_engineer", level="mid", persona="efficient")
    app.handle_candidate_answer("I would use a hash map keyed by short code.")
    app.handle_candidate_answer("Shard by key prefix.")
    report = app.end_and_get_feedback()

    session = lifecycle.get_session(app.session_id)
    assert session.finished is True
    assert len(session.questions_asked) == 3
    assert session.questions_asked[-1].candidate_answer is None
    assert session.waiting_for_answer is True

    assert "Q1: Design a URL shortener." in report
    assert "Your Answer: Shard by key prefix." in report
    assert "Notes: No evaluation available." in report
    assert "No answer provided." in report
    # Averages include the unanswered third question.
    assert "Communication: 2.0" in report
    assert "Technical: 2.7" in report
    assert fake_evaluator.interviewer not in [m.text for m in app.messages]


def test_evaluation_outage_does_not_block_interview(fake_evaluator):
    fake_evaluator.fail_replies = True
    lifecycle, app = _wired(fake_evaluator)

    app.start_session()
    app.handle_candidate_answer("An answer during the outage.")

    assert [m.role for m in app.messages][-2:] == ["candidate", "interviewer"]
    session = lifecycle.get_session(app.session_id)
    assert session.questions_asked[0].eval.notes == "No evaluation available."
    assert len(session.questions_asked) == 2


def test_cli_session_prints_transcript_and_feedback(fake_evaluator):
    fake_evaluator.questions = ["Why this job?"]
    _, app = _wired(fake_evaluator)
    answers = iter(["Because I like building things.", "/end"])
    out = io.StringIO()
    args = argparse.Namespace(role="retail", level="junior", persona="chatty")

    code = run(app, args, lambda prompt: next(answers), out)

    text = out.getvalue()
    assert code == 0
    assert "System: Session created for retail." in text
    assert "Interviewer: Why this job?" in text
    assert "You: Because I like building things." in text
    assert "INTERVIEW SUMMARY" in text
