"""Elapsed-time accounting, stopwatch and formatters."""

import pytest

from nazorun.timing import (
    Stopwatch,
    elapsed_ms,
    format_compact,
    format_precise,
    format_short,
    time_style,
)


# --- elapsed ---

def test_elapsed_basic():
    assert elapsed_ms(1_000, 4_500) == 3_500


def test_elapsed_clock_skew_is_zero():
    assert elapsed_ms(5_000, 4_000) == 0


def test_elapsed_subtracts_paused():
    assert elapsed_ms(0, 10_000, paused_ms=4_000) == 6_000
    assert elapsed_ms(0, 10_000, paused_ms=20_000) == 0


# --- formatters ---

@pytest.mark.parametrize("ms, expected", [
    (0, "00:00.00"),
    (90_500, "01:30.50"),
    (5_259, "00:05.25"),
    (59_999, "00:59.99"),
    (3_600_000, "60:00.00"),
])
def test_format_precise(ms, expected):
    assert format_precise(ms) == expected


@pytest.mark.parametrize("ms, expected", [
    (0, "0s"),
    (45_900, "45s"),
    (90_500, "1m 30s"),
    (600_000, "10m 0s"),
])
def test_format_short(ms, expected):
    assert format_short(ms) == expected


@pytest.mark.parametrize("ms, expected", [
    (5_250, "5.25"),
    (90_500, "1:30.50"),
    (61_000, "1:01.00"),
])
def test_format_compact(ms, expected):
    assert format_compact(ms) == expected


def test_formatters_treat_negative_as_zero():
    assert format_precise(-100) == "00:00.00"
    assert format_short(-100) == "0s"


def test_time_style_thresholds():
    assert time_style(0) == "green"
    assert time_style(4 * 60_000 + 59_999) == "green"
    assert time_style(5 * 60_000) == "yellow"
    assert time_style(10 * 60_000) == "red"


# --- stopwatch ---

def test_stopwatch_not_started(clock):
    sw = Stopwatch(clock)
    assert sw.elapsed_ms() == 0
    assert not sw.is_running


def test_stopwatch_elapsed(clock):
    sw = Stopwatch(clock)
    sw.start()
    clock.advance(1_500)
    assert sw.elapsed_ms() == 1_500


def test_stopwatch_pause_freezes_display(clock):
    sw = Stopwatch(clock)
    sw.start()
    clock.advance(1_000)
    sw.pause()
    clock.advance(5_000)
    assert sw.is_paused
    assert sw.elapsed_ms() == 1_000
    sw.resume()
    clock.advance(500)
    assert sw.elapsed_ms() == 1_500
    # start point is untouched by pausing
    assert sw.start_ms == clock.now - 6_500


def test_stopwatch_toggle(clock):
    sw = Stopwatch(clock)
    sw.start()
    assert sw.toggle() is True
    assert sw.toggle() is False


def test_stopwatch_laps_exclude_pauses(clock):
    sw = Stopwatch(clock)
    sw.start()
    clock.advance(2_000)
    assert sw.lap() == 2_000
    clock.advance(1_000)
    sw.pause()
    clock.advance(30_000)
    sw.resume()
    clock.advance(1_000)
    assert sw.lap() == 2_000
    assert sw.elapsed_ms() == 4_000
