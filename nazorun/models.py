"""Data models for nazorun.

Session, RunRecord, RankingEntry, PuzzleStats, Identity: the typed
structures that flow through session manager → runner → scorer → CLI.
"""

from __future__ import annotations

import json
import secrets
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_session_id() -> str:
    """Return an id of the form session_<epoch ms>_<9 random chars>."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


@dataclass
class Session:
    """One active puzzle attempt.

    segment_times and answers always have exactly total_questions slots.
    Mutation goes through SessionManager; nothing else should write fields.
    """

    id: str
    puzzle_id: str
    started_at: datetime
    start_time_ms: int
    total_questions: int
    current_question_index: int = 0
    segment_times: list[int] = field(default_factory=list)
    answers: list[str] = field(default_factory=list)
    current_answer: str = ""
    correct_count: int = 0
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    total_time_ms: int = 0

    @classmethod
    def create(cls, puzzle_id: str, total_questions: int, now_ms: Optional[int] = None) -> Session:
        """Fresh session with every slot zero/empty and the index at 0."""
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return cls(
            id=new_session_id(),
            puzzle_id=puzzle_id,
            started_at=datetime.fromtimestamp(now_ms / 1000, tz=timezone.utc),
            start_time_ms=now_ms,
            total_questions=total_questions,
            segment_times=[0] * total_questions,
            answers=[""] * total_questions,
        )

    @property
    def progress(self) -> float:
        """Percentage of questions passed."""
        if self.total_questions == 0:
            return 0.0
        return self.current_question_index / self.total_questions * 100

    @property
    def question_number(self) -> int:
        return self.current_question_index + 1

    @property
    def has_next_question(self) -> bool:
        return self.current_question_index < self.total_questions - 1

    @property
    def has_previous_question(self) -> bool:
        return self.current_question_index > 0

    def total_time(self, now_ms: Optional[int] = None) -> int:
        """Frozen total for completed sessions, otherwise time since start."""
        if self.is_completed:
            return self.total_time_ms
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return max(0, now_ms - self.start_time_ms)

    def is_valid(self) -> bool:
        """Check the structural invariants of the session."""
        if not self.id or not self.puzzle_id:
            return False
        if self.total_questions < 0:
            return False
        if not 0 <= self.current_question_index <= self.total_questions:
            return False
        if len(self.segment_times) != self.total_questions:
            return False
        if len(self.answers) != self.total_questions:
            return False
        return True

    def copy(self) -> Session:
        return Session(
            id=self.id,
            puzzle_id=self.puzzle_id,
            started_at=self.started_at,
            start_time_ms=self.start_time_ms,
            total_questions=self.total_questions,
            current_question_index=self.current_question_index,
            segment_times=list(self.segment_times),
            answers=list(self.answers),
            current_answer=self.current_answer,
            correct_count=self.correct_count,
            is_completed=self.is_completed,
            completed_at=self.completed_at,
            total_time_ms=self.total_time_ms,
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "id": self.id,
            "puzzle_id": self.puzzle_id,
            "started_at": self.started_at.isoformat(),
            "start_time_ms": self.start_time_ms,
            "total_questions": self.total_questions,
            "current_question_index": self.current_question_index,
            "segment_times": list(self.segment_times),
            "answers": list(self.answers),
            "current_answer": self.current_answer,
            "correct_count": self.correct_count,
            "is_completed": self.is_completed,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "total_time_ms": self.total_time_ms,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Session:
        """Deserialize from a JSON dict (session.json)."""
        return cls(
            id=d.get("id", ""),
            puzzle_id=d.get("puzzle_id", ""),
            started_at=_parse_dt(d.get("started_at")) or datetime.now(timezone.utc),
            start_time_ms=d.get("start_time_ms", 0),
            total_questions=d.get("total_questions", 0),
            current_question_index=d.get("current_question_index", 0),
            segment_times=list(d.get("segment_times", [])),
            answers=list(d.get("answers", [])),
            current_answer=d.get("current_answer", ""),
            correct_count=d.get("correct_count", 0),
            is_completed=d.get("is_completed", False),
            completed_at=_parse_dt(d.get("completed_at")),
            total_time_ms=d.get("total_time_ms", 0),
        )


@dataclass
class Identity:
    """Who is playing. Anonymous identities are issued locally."""

    id: str
    is_anonymous: bool
    display_name: str
    issued_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "is_anonymous": self.is_anonymous,
            "display_name": self.display_name,
            "issued_at": self.issued_at,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Identity:
        return cls(
            id=d.get("id", ""),
            is_anonymous=d.get("is_anonymous", True),
            display_name=d.get("display_name", ""),
            issued_at=d.get("issued_at", ""),
        )


@dataclass
class RunRecord:
    """Saved outcome of one session, completed or abandoned."""

    session_id: str
    puzzle_id: str
    timestamp: str
    user_id: str = ""
    user_name: str = ""
    is_anonymous: bool = True
    completed: bool = False
    total_time_ms: int = 0
    total_questions: int = 0
    correct_count: int = 0
    segment_times: list[int] = field(default_factory=list)
    answers: list[str] = field(default_factory=list)

    @classmethod
    def from_session(
        cls,
        session: Session,
        identity: Optional[Identity] = None,
        timestamp: Optional[str] = None,
        now_ms: Optional[int] = None,
    ) -> RunRecord:
        """Build a record from a session snapshot."""
        if timestamp is None:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        return cls(
            session_id=session.id,
            puzzle_id=session.puzzle_id,
            timestamp=timestamp,
            user_id=identity.id if identity else "",
            user_name=identity.display_name if identity else "",
            is_anonymous=identity.is_anonymous if identity else True,
            completed=session.is_completed,
            total_time_ms=session.total_time(now_ms),
            total_questions=session.total_questions,
            correct_count=session.correct_count,
            segment_times=list(session.segment_times),
            answers=list(session.answers),
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "session_id": self.session_id,
            "puzzle_id": self.puzzle_id,
            "timestamp": self.timestamp,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "is_anonymous": self.is_anonymous,
            "completed": self.completed,
            "total_time_ms": self.total_time_ms,
            "total_questions": self.total_questions,
            "correct_count": self.correct_count,
            "segment_times": self.segment_times,
            "answers": self.answers,
        }

    @classmethod
    def from_dict(cls, d: dict) -> RunRecord:
        """Deserialize from a JSON dict (run.json)."""
        return cls(
            session_id=d.get("session_id", ""),
            puzzle_id=d.get("puzzle_id", ""),
            timestamp=d.get("timestamp", ""),
            user_id=d.get("user_id", ""),
            user_name=d.get("user_name", ""),
            is_anonymous=d.get("is_anonymous", True),
            completed=d.get("completed", False),
            total_time_ms=d.get("total_time_ms", 0),
            total_questions=d.get("total_questions", 0),
            correct_count=d.get("correct_count", 0),
            segment_times=d.get("segment_times", []),
            answers=d.get("answers", []),
        )

    def save(self, run_dir: Path) -> None:
        """Write run.json to the run directory."""
        run_dir.mkdir(parents=True, exist_ok=True)
        (run_dir / "run.json").write_text(
            json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
        )

    @classmethod
    def load(cls, run_dir: Path) -> Optional[RunRecord]:
        """Load run.json from a run directory."""
        p = run_dir / "run.json"
        if not p.exists():
            return None
        try:
            return cls.from_dict(json.loads(p.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, OSError):
            return None


@dataclass
class RankingEntry:
    """One row of a puzzle leaderboard."""

    rank: int
    puzzle_id: str
    session_id: str
    user_name: str
    is_anonymous: bool
    total_time_ms: int
    timestamp: str
    segment_times: list[int] = field(default_factory=list)


@dataclass
class PuzzleStats:
    """Aggregates over every saved run of a puzzle."""

    total_players: int = 0
    attempts: int = 0
    completions: int = 0
    best_time_ms: int = 0
    average_time_ms: int = 0

    @property
    def completion_rate(self) -> float:
        if self.attempts == 0:
            return 0.0
        return self.completions / self.attempts * 100
