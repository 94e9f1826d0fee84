"""Environment-driven configuration for nazorun.

Every path is resolved on each call so tests (and users) can point
NAZORUN_HOME somewhere else without re-importing anything.

    NAZORUN_HOME              data root (default ~/.nazorun)
    NAZORUN_RESULTS_DIR       saved runs (default $NAZORUN_HOME/results)
    NAZORUN_ADVANCE_DELAY_MS  pause after a correct answer (default 1500)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ADVANCE_DELAY_MS = 1500


def data_root() -> Path:
    """Directory holding identity, the session mirror and results."""
    override = os.environ.get("NAZORUN_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".nazorun"


def results_root() -> Path:
    """Directory holding <puzzle_id>/<run>/run.json trees."""
    override = os.environ.get("NAZORUN_RESULTS_DIR")
    if override:
        return Path(override).expanduser()
    return data_root() / "results"


def identity_path() -> Path:
    return data_root() / "identity.json"


def session_path() -> Path:
    return data_root() / "session.json"


def report_path() -> Path:
    return data_root() / "RANKINGS.md"


def advance_delay_ms() -> int:
    """Delay before auto-advancing after a correct answer."""
    raw = os.environ.get("NAZORUN_ADVANCE_DELAY_MS")
    if raw is None or raw == "":
        return DEFAULT_ADVANCE_DELAY_MS
    try:
        return max(0, int(raw))
    except ValueError:
        logger.warning("Ignoring invalid NAZORUN_ADVANCE_DELAY_MS=%r", raw)
        return DEFAULT_ADVANCE_DELAY_MS
