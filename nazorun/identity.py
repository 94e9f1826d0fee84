"""Identity provider: who is playing.

There is no real sign-in: issue_anonymous_identity() always succeeds and
mints a uuid4-based identity, which is persisted to a JSON file so later
runs (and the leaderboard) see the same player.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from nazorun.models import Identity

logger = logging.getLogger(__name__)


def anonymous_name(identity_id: str) -> str:
    """'Anonymous-1a2b3c4d' for an id starting with 1a2b3c4d."""
    return f"Anonymous-{identity_id[:8]}"


def format_display_name(name: Optional[str], is_anonymous: bool) -> str:
    if not name:
        return "Anonymous user" if is_anonymous else "User"
    return name


class IdentityProvider:
    """File-backed store for the current identity."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def current_identity(self) -> Optional[Identity]:
        if not self.path.exists():
            return None
        try:
            identity = Identity.from_dict(json.loads(self.path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable identity file %s: %s", self.path, e)
            return None
        if not identity.id:
            return None
        return identity

    def issue_anonymous_identity(self) -> Identity:
        """Mint and persist a new anonymous identity, replacing any current one."""
        identity_id = str(uuid.uuid4())
        identity = Identity(
            id=identity_id,
            is_anonymous=True,
            display_name=anonymous_name(identity_id),
            issued_at=datetime.now(timezone.utc).isoformat(),
        )
        self._save(identity)
        logger.debug("Issued anonymous identity %s", identity.display_name)
        return identity

    def ensure_identity(self) -> Identity:
        """Current identity, signing in anonymously if there is none."""
        return self.current_identity() or self.issue_anonymous_identity()

    def sign_out(self) -> bool:
        """Forget the current identity. Returns False if there was none."""
        if not self.path.exists():
            return False
        self.path.unlink()
        return True

    def _save(self, identity: Identity) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(identity.to_dict(), indent=2), encoding="utf-8")
