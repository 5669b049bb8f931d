from __future__ import annotations

from fastapi.testclient import TestClient

from api_server import create_app
from interview_session import SessionStore
from services.sessions import SessionLifecycle


def _client(evaluator) -> TestClient:
    return TestClient(create_app(SessionLifecycle(SessionStore(), evaluator)))


def test_root_banner(fake_evaluator):
    resp = _client(fake_evaluator).get("/")
    assert resp.status_code == 200
    assert resp.text == "Interview Agent Backend"


def test_create_session_defaults_and_camel_case(fake_evaluator):
    client = _client(fake_evaluator)

    body = client.post("/api/session", json={}).json()["session"]
    assert body["role"] == "software_engineer"
    assert body["level"] == "mid"
    assert body["persona"] == "efficient"
    assert body["questionsAsked"] == []
    assert body["waitingForAnswer"] is False
    assert body["finished"] is False

    no_body = client.post("/api/session")
    assert no_body.status_code == 200
    assert no_body.json()["session"]["id"] != body["id"]


def test_next_question_then_wait(fake_evaluator):
    client = _client(fake_evaluator)
    session_id = client.post("/api/session", json={"role": "sales"}).json()["session"]["id"]

    first = client.get(f"/api/session/{session_id}/next").json()
    assert first["wait"] is False
    assert first["question"]["id"] == "dyn-1"
    assert first["question"]["candidateAnswer"] is None
    assert first["question"]["eval"] is None

    second = client.get(f"/api/session/{session_id}/next").json()
    assert second["wait"] is True
    assert second["question"] is None


def test_answer_returns_interviewer_and_eval(fake_evaluator):
    client = _client(fake_evaluator)
    session_id = client.post("/api/session", json={}).json()["session"]["id"]
    client.get(f"/api/session/{session_id}/next")

    resp = client.post(f"/api/session/{session_id}/answer", json={"text": "I would use a hash map"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["interviewer"] == "Thanks, noted."
    assert set(body["eval"]) == {"communication", "technical", "structure", "confidence", "notes"}


def test_answer_without_question_is_bad_request(fake_evaluator):
    client = _client(fake_evaluator)
    session_id = client.post("/api/session", json={}).json()["session"]["id"]

    resp = client.post(f"/api/session/{session_id}/answer", json={"text": "hello"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "no active question"


def test_unknown_session_responses(fake_evaluator):
    client = _client(fake_evaluator)

    assert client.get("/api/session/missing/next").status_code == 404
    assert client.post("/api/session/missing/answer", json={"text": "x"}).status_code == 404
    assert client.post("/api/session/missing/end").status_code == 404

    feedback = client.get("/api/session/missing/feedback")
    assert feedback.status_code == 404
    assert feedback.text == "Session not found"
    assert feedback.headers["content-type"].startswith("text/plain")


def test_question_generation_failure_is_bad_gateway(fake_evaluator):
    fake_evaluator.fail_questions = True
    client = _client(fake_evaluator)
    session_id = client.post("/api/session", json={}).json()["session"]["id"]

    resp = client.get(f"/api/session/{session_id}/next")
    assert resp.status_code == 502


def test_feedback_is_plain_text(fake_evaluator):
    fake_evaluator.evals = [
        {"communication": 4, "technical": 4, "structure": 4, "confidence": 4, "notes": "a"},
        {"communication": 2, "technical": 2, "structure": 2, "confidence": 2, "notes": "b"},
    ]
    client = _client(fake_evaluator)
    session_id = client.post("/api/session", json={}).json()["session"]["id"]
    for answer in ("first", "second"):
        client.get(f"/api/session/{session_id}/next")
        client.post(f"/api/session/{session_id}/answer", json={"text": answer})

    resp = client.get(f"/api/session/{session_id}/feedback")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text.startswith("INTERVIEW SUMMARY")
    assert resp.text.endswith("Confidence: 3.0")
    assert "Communication: 3.0" in resp.text


def test_end_session_then_next_is_done(fake_evaluator):
    client = _client(fake_evaluator)
    session_id = client.post("/api/session", json={}).json()["session"]["id"]

    ended = client.post(f"/api/session/{session_id}/end").json()
    assert ended["session"]["finished"] is True

    nxt = client.get(f"/api/session/{session_id}/next").json()
    assert nxt["done"] is True

    late = client.post(f"/api/session/{session_id}/answer", json={"text": "late"})
    assert late.status_code == 409
