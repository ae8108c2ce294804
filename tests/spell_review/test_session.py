"""
Tests for Correction Sessions
=============================
State machine transitions and the session registry.
"""

import time

import pytest

from config_logging import SessionNotFoundError, SessionStateError
from spell_review.models import SessionState
from spell_review.session import CorrectionSession, SessionManager, get_session_manager

TEXT = "teh freind is wierd"


@pytest.fixture
def session() -> CorrectionSession:
    return CorrectionSession(TEXT).run_check()


class TestCorrectionSession:
    """Tests for CorrectionSession."""

    def test_initial_state(self):
        assert CorrectionSession(TEXT).state is SessionState.IDLE

    def test_check_finds_errors(self, session):
        assert session.state is SessionState.REVIEWING
        assert [e.word for e in session.errors] == ["teh", "freind", "wierd"]
        assert session.current_error.word == "teh"
        assert session.progress() == {'current': 1, 'total': 3}

    def test_clean_text(self):
        clean = CorrectionSession("the cat").run_check()
        assert clean.state is SessionState.CLEAN
        assert clean.current_error is None
        assert clean.progress() == {'current': 0, 'total': 0}
        assert clean.apply() == "the cat"

    def test_full_review(self, session):
        """Replace, skip, replace, then come back to the skipped error."""
        nxt = session.replace("the")
        assert nxt.word == "freind"
        assert session.progress() == {'current': 1, 'total': 2}

        nxt = session.skip()
        assert nxt.word == "wierd"

        nxt = session.replace("weird")
        # Cursor clamps back onto the remaining skipped error
        assert session.current_index == 0
        assert (nxt.word, nxt.start_index, nxt.end_index) == ("freind", 4, 10)

        assert session.replace("friend") is None
        assert session.state is SessionState.REVIEWING_EMPTY
        assert session.corrections_applied == 3
        assert session.skipped == 1
        assert session.apply() == "the friend is weird"
        assert session.state is SessionState.APPLIED

    def test_length_changes_keep_offsets(self):
        s = CorrectionSession("alot of teh").run_check()
        s.replace("a lot")
        error = s.current_error
        assert s.text[error.start_index:error.end_index] == "teh"
        s.replace("the")
        assert s.apply() == "a lot of the"

    def test_skip_on_last_error_stays(self, session):
        session.skip()
        session.skip()
        assert session.current_error.word == "wierd"
        session.skip()
        assert session.current_index == 2
        assert session.state is SessionState.REVIEWING

    def test_apply_with_pending_errors(self, session):
        """Applying early keeps whatever was corrected so far."""
        session.replace("the")
        assert session.apply() == "the freind is wierd"

    def test_cancel_discards_corrections(self, session):
        session.replace("the")
        assert session.cancel() == TEXT
        assert session.state is SessionState.CANCELLED
        assert session.errors == []

    def test_actions_after_terminal_state(self, session):
        session.apply()
        with pytest.raises(SessionStateError):
            session.replace("x")
        with pytest.raises(SessionStateError):
            session.apply()
        with pytest.raises(SessionStateError):
            session.cancel()

    def test_replace_requires_reviewing(self):
        clean = CorrectionSession("the cat").run_check()
        with pytest.raises(SessionStateError):
            clean.replace("dog")
        with pytest.raises(SessionStateError):
            clean.skip()

    def test_failed_check(self):
        class BrokenCorrector:
            def check(self, text):
                raise RuntimeError("dictionary unavailable")

        broken = CorrectionSession(TEXT, corrector=BrokenCorrector())
        with pytest.raises(RuntimeError):
            broken.run_check()
        assert broken.state is SessionState.FAILED
        assert broken.failure == "dictionary unavailable"

    def test_cancel_during_failing_check(self):
        """A cancel that lands mid-check stays final even if the check then fails."""
        class CancelThenFail:
            def check(self, text):
                pending.cancel()
                raise RuntimeError("dictionary unavailable")

        pending = CorrectionSession(TEXT, corrector=CancelThenFail())
        assert pending.run_check() is pending
        assert pending.state is SessionState.CANCELLED
        assert pending.failure is None

    def test_check_only_once(self, session):
        with pytest.raises(SessionStateError):
            session.run_check()

    def test_to_dict(self, session):
        data = session.to_dict()
        assert data['state'] == 'reviewing'
        assert data['text'] == TEXT
        assert data['current_error'] == {
            'word': 'teh', 'startIndex': 0, 'endIndex': 3, 'suggestions': ['the'],
        }
        assert 'text' not in session.to_dict(include_text=False)


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_and_get(self):
        manager = SessionManager()
        created = manager.create_session(TEXT)
        assert manager.get_session(created.session_id) is created
        assert created.state is SessionState.REVIEWING

    def test_unknown_session(self):
        with pytest.raises(SessionNotFoundError):
            SessionManager().get_session("missing")

    def test_remove(self):
        manager = SessionManager()
        created = manager.create_session(TEXT)
        assert manager.remove_session(created.session_id)
        assert not manager.remove_session(created.session_id)

    def test_capacity(self):
        """The oldest sessions are evicted when full."""
        manager = SessionManager(max_sessions=2)
        first = manager.create_session("teh")
        manager.create_session("wierd")
        manager.create_session("freind")
        assert len(manager) == 2
        with pytest.raises(SessionNotFoundError):
            manager.get_session(first.session_id)

    def test_expired_sessions_removed(self):
        manager = SessionManager(session_ttl=-1)
        first = manager.create_session("teh")
        manager.create_session("wierd")
        with pytest.raises(SessionNotFoundError):
            manager.get_session(first.session_id)

    def test_list_sessions_by_state(self):
        manager = SessionManager()
        manager.create_session("the cat")
        manager.create_session(TEXT)
        listed = manager.list_sessions(SessionState.CLEAN)
        assert len(listed) == 1
        assert 'text' not in listed[0]

    def test_background_check(self):
        manager = SessionManager()
        created = manager.create_session(TEXT, background=True)
        deadline = time.time() + 5
        while created.state in (SessionState.IDLE, SessionState.CHECKING) and time.time() < deadline:
            time.sleep(0.01)
        assert created.state is SessionState.REVIEWING
        assert len(created.errors) == 3

    def test_global_manager_is_shared(self):
        assert get_session_manager() is get_session_manager()
