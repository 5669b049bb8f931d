import threading

import pytest

from interview_session import SessionNotFound, SessionStore


def test_create_allocates_fresh_session():
    store = SessionStore()
    session = store.create(role="software_engineer", level="mid", persona="efficient")

    assert session.id
    assert session.questions_asked == []
    assert session.waiting_for_answer is False
    assert session.finished is False
    assert store.get(session.id) is session
    assert session.id in store
    assert len(store) == 1


def test_identifiers_are_unique():
    store = SessionStore()
    ids = {store.create(role="r", level="l", persona="p").id for _ in range(50)}
    assert len(ids) == 50


def test_unknown_session_raises_not_found():
    store = SessionStore()
    with pytest.raises(SessionNotFound) as excinfo:
        store.get("missing")
    assert excinfo.value.session_id == "missing"

    with pytest.raises(SessionNotFound):
        with store.lock("missing"):
            pass


def test_lock_is_exclusive_per_session():
    store = SessionStore()
    first = store.create(role="r", level="l", persona="p")
    second = store.create(role="r", level="l", persona="p")
    entered = threading.Event()
    release = threading.Event()

    def hold_first():
        with store.lock(first.id):
            entered.set()
            release.wait(timeout=5)

    worker = threading.Thread(target=hold_first)
    worker.start()
    assert entered.wait(timeout=5)

    # Another session's lock is independent.
    with store.lock(second.id) as session:
        assert session is second

    blocked = threading.Event()

    def try_first():
        with store.lock(first.id):
            blocked.set()

    contender = threading.Thread(target=try_first)
    contender.start()
    assert not blocked.wait(timeout=0.2)
    release.set()
    worker.join(timeout=5)
    contender.join(timeout=5)
    assert blocked.is_set()
