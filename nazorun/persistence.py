"""JSON mirror of the live session.

Registered as a SessionManager observer: rewrites session.json after every
committed mutation and deletes it when the session is cleared. `play --resume`
reads it back.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from nazorun.models import Session

logger = logging.getLogger(__name__)


class JsonSessionMirror:
    """Mirrors a session to a single JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def session_changed(self, session: Optional[Session]) -> None:
        if session is None:
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(session.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)

    def load(self) -> Optional[Session]:
        """The mirrored session, or None if missing or unreadable."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Session.from_dict(data)
        except (json.JSONDecodeError, OSError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable session mirror %s: %s", self.path, e)
            return None
