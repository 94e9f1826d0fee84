"""Elapsed-time accounting and duration formatting.

All durations are integer milliseconds. The formatters are pure functions;
Stopwatch is the only stateful piece and takes an injectable clock so the
runner and tests can drive it deterministically.
"""

from __future__ import annotations

import time
from typing import Callable, Optional


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def elapsed_ms(start_ms: int, now: Optional[int] = None, paused_ms: int = 0) -> int:
    """Milliseconds between start_ms and now, minus paused_ms.

    Clock skew (now earlier than start) yields 0, never a negative value.
    """
    if now is None:
        now = now_ms()
    return max(0, now - start_ms - paused_ms)


def _split(ms: int) -> tuple[int, int, int]:
    """(minutes, seconds, centiseconds) for a non-negative duration."""
    ms = max(0, int(ms))
    total_seconds = ms // 1000
    return total_seconds // 60, total_seconds % 60, (ms % 1000) // 10


def format_precise(ms: int) -> str:
    """Active-run display: mm:ss.cc, e.g. 90_500 -> '01:30.50'."""
    minutes, seconds, centis = _split(ms)
    return f"{minutes:02d}:{seconds:02d}.{centis:02d}"


def format_short(ms: int) -> str:
    """Summary display: '1m 30s' or '45s'."""
    minutes, seconds, _ = _split(ms)
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def format_compact(ms: int) -> str:
    """Listing display: '1:30.50' when at least a minute, else '5.25'."""
    minutes, seconds, centis = _split(ms)
    if minutes > 0:
        return f"{minutes}:{seconds:02d}.{centis:02d}"
    return f"{seconds}.{centis:02d}"


def time_style(ms: int) -> str:
    """Rich style for a running timer: green, then yellow, then red."""
    minutes = max(0, int(ms)) // 60000
    if minutes < 5:
        return "green"
    if minutes < 10:
        return "yellow"
    return "red"


class Stopwatch:
    """Pausable run timer.

    Pausing freezes elapsed_ms() without moving the start point; resuming adds
    the paused span to an accumulator that is subtracted from the raw elapsed
    value. lap() returns the non-paused time since the previous lap, which is
    what gets recorded as a question's segment time.
    """

    def __init__(self, clock: Callable[[], int] = now_ms) -> None:
        self._clock = clock
        self._start: Optional[int] = None
        self._paused_total = 0
        self._paused_at: Optional[int] = None
        self._last_lap = 0

    @property
    def is_running(self) -> bool:
        return self._start is not None

    @property
    def is_paused(self) -> bool:
        return self._paused_at is not None

    @property
    def start_ms(self) -> Optional[int]:
        return self._start

    def start(self, at: Optional[int] = None) -> None:
        """Start (or restart) from `at`, defaulting to the clock."""
        self._start = self._clock() if at is None else at
        self._paused_total = 0
        self._paused_at = None
        self._last_lap = 0

    def pause(self) -> None:
        if self._start is None or self._paused_at is not None:
            return
        self._paused_at = self._clock()

    def resume(self) -> None:
        if self._paused_at is None:
            return
        self._paused_total += max(0, self._clock() - self._paused_at)
        self._paused_at = None

    def toggle(self) -> bool:
        """Pause if running, resume if paused. Returns the new paused state."""
        if self.is_paused:
            self.resume()
        else:
            self.pause()
        return self.is_paused

    def elapsed_ms(self) -> int:
        if self._start is None:
            return 0
        now = self._paused_at if self._paused_at is not None else self._clock()
        return elapsed_ms(self._start, now, self._paused_total)

    def lap(self) -> int:
        current = self.elapsed_ms()
        segment = max(0, current - self._last_lap)
        self._last_lap = current
        return segment
