"""Session lifecycle manager: owns the single live Session.

States: NoSession → Active → Completed. start() enters Active from any
state (it doubles as a reset), next_question() moves Active → Completed when
the index reaches the bound, clear() returns to NoSession.

Mutations on a missing session are ignored rather than raised, so UI callers
that race a clear() stay harmless (record_segment_time() still rejects an
out-of-range index on a live session). Every committed mutation is reported to
the registered observers (see nazorun.persistence.JsonSessionMirror).
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Iterable, Optional, Protocol

from nazorun.errors import InvalidRangeError, NoActiveSessionError
from nazorun.models import Session
from nazorun.timing import now_ms

logger = logging.getLogger(__name__)


class SessionObserver(Protocol):
    """Called after every committed mutation; None means the session was cleared."""

    def session_changed(self, session: Optional[Session]) -> None: ...


class SessionManager:
    """Controlled mutation of one Session.

    A single lock guards every mutation, including the delayed auto-advance
    which fires on a timer thread.
    """

    def __init__(self, observers: Iterable[SessionObserver] = (), clock=now_ms) -> None:
        self._session: Optional[Session] = None
        self._observers = list(observers)
        self._clock = clock
        self._lock = threading.RLock()
        self._advance_timer: Optional[threading.Timer] = None
        self._advance_generation = 0
        self._advance_done = threading.Event()
        self._advance_done.set()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def session(self) -> Optional[Session]:
        """A copy of the live session, or None."""
        with self._lock:
            return self._session.copy() if self._session else None

    @property
    def has_session(self) -> bool:
        return self._session is not None

    def require_session(self) -> Session:
        session = self.session
        if session is None:
            raise NoActiveSessionError("No puzzle session is active")
        return session

    def add_observer(self, observer: SessionObserver) -> None:
        self._observers.append(observer)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, puzzle_id: str, total_questions: int) -> Session:
        """Discard any existing session and start a fresh one."""
        if total_questions < 0:
            raise ValueError(f"total_questions must be >= 0, got {total_questions}")
        with self._lock:
            self._cancel_advance_locked()
            if self._session:
                logger.debug("Discarding session %s", self._session.id)
            self._session = Session.create(puzzle_id, total_questions, now_ms=self._clock())
            logger.debug("Started session %s for puzzle %s (%d questions)",
                         self._session.id, puzzle_id, total_questions)
            self._notify()
            return self._session.copy()

    def restore(self, session: Session) -> bool:
        """Install a previously mirrored session. Returns False if it is invalid."""
        if not session.is_valid():
            logger.warning("Refusing to restore invalid session %s", session.id)
            return False
        with self._lock:
            self._cancel_advance_locked()
            self._session = session.copy()
            self._notify()
        return True

    def update_answer(self, text: str) -> None:
        with self._lock:
            if self._session is None:
                logger.debug("update_answer ignored: no session")
                return
            self._session.current_answer = text
            self._notify()

    def submit_answer(self, text: str, is_correct: bool) -> None:
        """Record `text` for the current question and clear the input buffer.

        Does not advance; call next_question() (or schedule_advance()) for that.
        """
        with self._lock:
            s = self._session
            if s is None:
                logger.debug("submit_answer ignored: no session")
                return
            if s.current_question_index >= s.total_questions:
                logger.debug("submit_answer ignored: session %s has no open question", s.id)
                return
            s.answers[s.current_question_index] = text
            if is_correct:
                s.correct_count += 1
            s.current_answer = ""
            self._notify()

    def next_question(self) -> None:
        """Advance by one question, completing the session at the last one.

        The index never goes past total_questions.
        """
        with self._lock:
            s = self._session
            if s is None:
                logger.debug("next_question ignored: no session")
                return
            s.current_question_index = min(s.current_question_index + 1, s.total_questions)
            if s.current_question_index >= s.total_questions:
                self._mark_completed(s)
            self._notify()

    def complete(self) -> None:
        """Force completion without moving the index."""
        with self._lock:
            s = self._session
            if s is None:
                logger.debug("complete ignored: no session")
                return
            self._mark_completed(s)
            self._notify()

    def record_segment_time(self, index: int, duration_ms: int) -> None:
        """Store the elapsed time for question `index`.

        Raises InvalidRangeError for an index outside [0, total_questions) or
        a negative duration; the session is left untouched in that case. This
        is the only transition that raises on an active session instead of
        ignoring the call: a bad index is a caller bug, not a UI race.
        """
        with self._lock:
            s = self._session
            if s is None:
                logger.debug("record_segment_time ignored: no session")
                return
            if not 0 <= index < s.total_questions:
                raise InvalidRangeError(
                    f"Segment index {index} out of range for {s.total_questions} questions"
                )
            if duration_ms < 0:
                raise InvalidRangeError(f"Segment duration must be >= 0, got {duration_ms}")
            s.segment_times[index] = int(duration_ms)
            self._notify()

    def clear(self) -> None:
        """Drop the session (and any pending auto-advance)."""
        with self._lock:
            self._cancel_advance_locked()
            if self._session is None:
                return
            logger.debug("Cleared session %s", self._session.id)
            self._session = None
            self._notify()

    # ------------------------------------------------------------------
    # Delayed auto-advance
    # ------------------------------------------------------------------

    def schedule_advance(self, delay_ms: int) -> None:
        """Call next_question() after `delay_ms`, unless cancelled first.

        The timer is bound to the session live right now; if that session has
        been cleared or replaced when it fires, nothing happens.
        """
        with self._lock:
            if self._session is None:
                return
            self._cancel_advance_locked()
            session_id = self._session.id
            generation = self._advance_generation
            self._advance_done.clear()
            timer = threading.Timer(
                max(0, delay_ms) / 1000, self._fire_advance, args=(session_id, generation)
            )
            timer.daemon = True
            self._advance_timer = timer
            timer.start()

    def cancel_advance(self) -> None:
        with self._lock:
            self._cancel_advance_locked()

    @property
    def advance_pending(self) -> bool:
        return not self._advance_done.is_set()

    def wait_for_advance(self, timeout: Optional[float] = None) -> bool:
        """Block until the pending advance fired or was cancelled."""
        return self._advance_done.wait(timeout)

    def _fire_advance(self, session_id: str, generation: int) -> None:
        with self._lock:
            if generation != self._advance_generation:
                # cancelled while this thread was waiting for the lock
                return
            self._advance_timer = None
            try:
                if self._session is None or self._session.id != session_id:
                    logger.debug("Auto-advance dropped: session %s is gone", session_id)
                    return
                self.next_question()
            finally:
                self._advance_done.set()

    def _cancel_advance_locked(self) -> None:
        self._advance_generation += 1
        if self._advance_timer is not None:
            self._advance_timer.cancel()
            self._advance_timer = None
        self._advance_done.set()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _mark_completed(self, s: Session) -> None:
        if s.is_completed:
            return
        s.is_completed = True
        now = self._clock()
        s.total_time_ms = max(0, now - s.start_time_ms)
        s.completed_at = datetime.fromtimestamp(now / 1000, tz=timezone.utc)
        logger.debug("Session %s completed in %d ms", s.id, s.total_time_ms)

    def _notify(self) -> None:
        snapshot = self._session.copy() if self._session else None
        for observer in self._observers:
            observer.session_changed(snapshot)
