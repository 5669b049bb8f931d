import pytest

import observability.tracing as tracing
from observability.logger import _format_human


def test_format_human_lists_known_fields():
    line = _format_human({"session_id": "s1", "kind": "question_issued", "question_id": "dyn-1", "other": 1})
    assert line == "session=s1 kind=question_issued question_id=dyn-1"


def test_span_reports_duration_and_outcome(monkeypatch):
    events = []
    monkeypatch.setattr(tracing, "log_event", lambda kind, session_id, **fields: events.append((kind, session_id, fields)))

    with tracing.span("generate_next_question", "s1"):
        pass
    with pytest.raises(ValueError):
        with tracing.span("generate_interviewer_reply", "s1", question_id="dyn-1"):
            raise ValueError("boom")

    assert [e[2]["outcome"] for e in events] == ["ok", "error"]
    assert events[0][2]["span"] == "generate_next_question"
    assert events[1][2]["question_id"] == "dyn-1"
    assert all(e[2]["ms"] >= 0 for e in events)
