#!/usr/bin/env python3
"""
Correction Session Manager
==========================
Caller-driven review of spelling errors, one at a time.

State machine:
    IDLE -> CHECKING -> CLEAN            (no errors found)
                     -> REVIEWING        (errors found)
    REVIEWING --replace/skip--> REVIEWING | REVIEWING_EMPTY
    CLEAN | REVIEWING | REVIEWING_EMPTY --apply--> APPLIED   (corrected text)
    any non-terminal state --cancel--> CANCELLED             (original text)

Features:
- Offsets of pending errors stay valid after each replacement
- Thread-safe session registry with TTL cleanup
- Optional background checking so HTTP callers can poll
"""

import threading
import time
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from config_logging import get_logger, SessionStateError, SessionNotFoundError
from . import config as spelling_config
from .corrector import SpellingCorrector, apply_correction_and_shift, replace_word
from .models import SessionState, SpellingError

__version__ = "1.0.0"

logger = get_logger('spell_review.session')

_ACTIVE_STATES = (SessionState.CLEAN, SessionState.REVIEWING, SessionState.REVIEWING_EMPTY)


class CorrectionSession:
    """
    A single spelling review over one text.

    Usage:
        session = CorrectionSession("I saw teh cat")
        session.run_check()
        session.replace(session.current_error.suggestions[0])
        corrected = session.apply()
    """

    def __init__(
        self,
        text: str,
        corrector: Optional[SpellingCorrector] = None,
        session_id: Optional[str] = None
    ):
        self.session_id = session_id or str(uuid.uuid4())[:12]
        self.original_text = text
        self.text = text
        self.errors: List[SpellingError] = []
        self.current_index = 0
        self.state = SessionState.IDLE
        self.corrections_applied = 0
        self.skipped = 0
        self.failure: Optional[str] = None
        self.created_at = time.time()
        self.updated_at = self.created_at
        self._corrector = corrector or SpellingCorrector()
        self._lock = threading.RLock()

    # ------------- checking -------------

    def run_check(self) -> 'CorrectionSession':
        """Check the text and move to CLEAN or REVIEWING."""
        with self._lock:
            self._require(SessionState.IDLE, action='check')
            self._transition(SessionState.CHECKING)

        try:
            errors = self._corrector.check(self.original_text)
        except Exception as e:
            with self._lock:
                if self.state is not SessionState.CHECKING:
                    logger.warning(f"Spelling check failed after session {self.session_id} "
                                   f"was {self.state.value}: {e}", session_id=self.session_id)
                    return self
                self.failure = str(e)
                self._transition(SessionState.FAILED)
            logger.exception(f"Spelling check failed for session {self.session_id}: {e}")
            raise

        with self._lock:
            # A cancel during the check wins; the result is discarded
            if self.state is not SessionState.CHECKING:
                return self
            self.errors = errors
            self.current_index = 0
            self._transition(SessionState.REVIEWING if errors else SessionState.CLEAN)
        return self

    # ------------- review -------------

    @property
    def current_error(self) -> Optional[SpellingError]:
        with self._lock:
            if self.state is SessionState.REVIEWING and self.errors:
                return self.errors[self.current_index]
            return None

    def replace(self, replacement: str) -> Optional[SpellingError]:
        """
        Replace the current error's word and advance to the next error.

        Returns the error now under the cursor, or None when none remain.
        """
        with self._lock:
            self._require(SessionState.REVIEWING, action='replace')
            error = self.errors[self.current_index]
            self.text = replace_word(self.text, error, replacement)
            self.errors = apply_correction_and_shift(self.errors, self.current_index, replacement)
            self.corrections_applied += 1

            # The same index now points at the following error
            if self.current_index >= len(self.errors):
                self.current_index = max(0, len(self.errors) - 1)

            if not self.errors:
                self._transition(SessionState.REVIEWING_EMPTY)
            else:
                self.updated_at = time.time()
            logger.debug(f"Replaced '{error.word}' with '{replacement}'",
                         session_id=self.session_id, remaining=len(self.errors))
            return self.current_error

    def skip(self) -> Optional[SpellingError]:
        """Leave the current error uncorrected and move to the next one."""
        with self._lock:
            self._require(SessionState.REVIEWING, action='skip')
            if self.current_index < len(self.errors) - 1:
                self.current_index += 1
                self.skipped += 1
            self.updated_at = time.time()
            return self.current_error

    # ------------- terminal actions -------------

    def apply(self) -> str:
        """Finish the review and return the corrected text."""
        with self._lock:
            self._require(*_ACTIVE_STATES, action='apply')
            self._transition(SessionState.APPLIED)
            return self.text

    def cancel(self) -> str:
        """Discard all pending corrections and return the original text."""
        with self._lock:
            if self.state.is_terminal:
                raise SessionStateError(
                    f"Cannot cancel session in state '{self.state.value}'",
                    state=self.state.value)
            self.text = self.original_text
            self.errors = []
            self.current_index = 0
            self._transition(SessionState.CANCELLED)
            return self.original_text

    # ------------- helpers -------------

    def progress(self) -> Dict[str, int]:
        with self._lock:
            return {
                'current': self.current_index + 1 if self.errors else 0,
                'total': len(self.errors),
            }

    def _require(self, *allowed: SessionState, action: str):
        if self.state not in allowed:
            raise SessionStateError(
                f"Cannot {action} in state '{self.state.value}'",
                state=self.state.value, action=action)

    def _transition(self, new_state: SessionState):
        logger.info(f"Session {self.session_id}: {self.state.value} -> {new_state.value}",
                    session_id=self.session_id)
        self.state = new_state
        self.updated_at = time.time()

    def to_dict(self, include_text: bool = True) -> Dict[str, Any]:
        """Convert to dictionary for API response."""
        with self._lock:
            current = self.current_error
            data = {
                'session_id': self.session_id,
                'state': self.state.value,
                'errors': [e.to_dict() for e in self.errors],
                'current_index': self.current_index,
                'current_error': current.to_dict() if current else None,
                'progress': self.progress(),
                'corrections_applied': self.corrections_applied,
                'skipped': self.skipped,
                'created_at': datetime.fromtimestamp(self.created_at).isoformat(),
                'updated_at': datetime.fromtimestamp(self.updated_at).isoformat(),
                'error': self.failure,
            }
            if include_text:
                data['text'] = self.text
            return data


class SessionManager:
    """
    Thread-safe registry of correction sessions.

    Usage:
        manager = SessionManager()
        session = manager.create_session(text)
        manager.get_session(session.session_id).replace('the')
    """

    def __init__(
        self,
        max_sessions: Optional[int] = None,
        session_ttl: Optional[float] = None,
        corrector: Optional[SpellingCorrector] = None
    ):
        """
        Initialize session manager.

        Args:
            max_sessions: Maximum sessions to keep in memory
            session_ttl: Seconds a session may sit untouched before removal
            corrector: Shared corrector (defaults to one built from config)
        """
        cfg = spelling_config.get_config()
        self._sessions: Dict[str, CorrectionSession] = {}
        self._lock = threading.RLock()
        self._max_sessions = max_sessions if max_sessions is not None else cfg.max_sessions
        self._session_ttl = session_ttl if session_ttl is not None else cfg.session_ttl
        self._corrector = corrector or SpellingCorrector(cfg)

    @property
    def corrector(self) -> SpellingCorrector:
        """Corrector shared by every session in this registry."""
        return self._corrector

    def create_session(self, text: str, background: bool = False) -> CorrectionSession:
        """
        Create a session and start checking its text.

        With background=True the check runs on a daemon thread and the
        session is returned while still CHECKING.
        """
        session = CorrectionSession(text, corrector=self._corrector)
        with self._lock:
            self._cleanup_old_sessions()
            self._sessions[session.session_id] = session

        if background:
            worker = threading.Thread(
                target=self._run_in_background, args=(session,),
                name=f"spellcheck-{session.session_id}", daemon=True)
            worker.start()
        else:
            session.run_check()
        return session

    @staticmethod
    def _run_in_background(session: CorrectionSession):
        try:
            session.run_check()
        except Exception:
            # Already recorded on the session as FAILED
            pass

    def get_session(self, session_id: str) -> CorrectionSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def remove_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def list_sessions(self, state: Optional[SessionState] = None) -> List[Dict[str, Any]]:
        with self._lock:
            sessions = list(self._sessions.values())
        if state is not None:
            sessions = [s for s in sessions if s.state is state]
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return [s.to_dict(include_text=False) for s in sessions]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _cleanup_old_sessions(self):
        """Drop expired sessions, then the least recently used ones if full."""
        with self._lock:
            now = time.time()
            expired = [sid for sid, s in self._sessions.items()
                       if (now - s.updated_at) > self._session_ttl]
            for sid in expired:
                del self._sessions[sid]

            if len(self._sessions) >= self._max_sessions:
                # Finished sessions go first, then by last activity
                by_age = sorted(self._sessions.values(),
                                key=lambda s: (not s.state.is_terminal, s.updated_at))
                while len(self._sessions) >= self._max_sessions and by_age:
                    del self._sessions[by_age.pop(0).session_id]


# Global session manager instance
_session_manager: Optional[SessionManager] = None


def get_session_manager() -> SessionManager:
    """Get or create the global session manager instance."""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager


def reset_session_manager():
    """Drop the global session manager (for testing)."""
    global _session_manager
    _session_manager = None
