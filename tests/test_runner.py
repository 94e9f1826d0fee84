"""Scripted terminal runs through play_puzzle()."""

import io

import pytest
from rich.console import Console

from nazorun.runner import play_puzzle
from nazorun.scorer import load_runs
from nazorun.session import SessionManager


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


def _script(clock, lines, step_ms=1_000):
    """read_input stand-in: each prompt takes step_ms, then EOF."""
    it = iter(lines)

    def read(prompt):
        clock.advance(step_ms)
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return read


def _play(puzzle_id, lines, clock, provider, mirror, console, **kwargs):
    return play_puzzle(
        puzzle_id,
        console,
        read_input=_script(clock, lines),
        identity_provider=provider,
        mirror=mirror,
        advance_delay_ms=0,
        clock=clock,
        **kwargs,
    )


def test_full_run_saves_record(home, clock, provider, mirror, console):
    record = _play("1", ["42", "256", "17"], clock, provider, mirror, console)
    assert record.completed
    assert record.answers == ["42", "256", "17"]
    assert record.segment_times == [1_000, 1_000, 1_000]
    assert record.total_time_ms == 3_000
    assert record.correct_count == 3
    assert record.user_name == provider.current_identity().display_name
    assert [r.session_id for r in load_runs("1")] == [record.session_id]
    assert not mirror.path.exists()
    assert "Cleared!" in console.file.getvalue()


def test_alternative_answers_and_case(home, clock, provider, mirror, console):
    record = _play("3", ["8", "TRIANGLE", "Hexagon"], clock, provider, mirror, console)
    assert record.completed
    assert record.answers == ["8", "TRIANGLE", "Hexagon"]


def test_wrong_and_invalid_answers_count_toward_segment(home, clock, provider, mirror, console):
    record = _play("1", ["abc", "41", "42", "256", "17"], clock, provider, mirror, console)
    assert record.completed
    assert record.segment_times == [3_000, 1_000, 1_000]
    assert record.correct_count == 3
    out = console.file.getvalue()
    assert "Digits only" in out
    assert "Incorrect" in out


def test_quit_saves_incomplete_run(home, clock, provider, mirror, console):
    record = _play("1", ["42", ":q"], clock, provider, mirror, console)
    assert not record.completed
    assert record.answers == ["42", "", ""]
    assert record.total_time_ms == 2_000
    assert load_runs("1")[0].completed is False
    assert not mirror.path.exists()


def test_eof_suspends_and_resume_finishes(home, clock, provider, mirror, console):
    assert _play("1", ["42"], clock, provider, mirror, console) is None
    suspended = mirror.load()
    assert suspended.current_question_index == 1
    assert load_runs("1") == []

    record = _play("1", ["256", "17"], clock, provider, mirror, console, resume=True)
    assert record.completed
    assert record.session_id == suspended.id
    assert record.answers == ["42", "256", "17"]
    assert "Resuming at question 2" in console.file.getvalue()


def test_resume_without_mirror_starts_fresh(home, clock, provider, mirror, console):
    record = _play("1", ["42", "256", "17"], clock, provider, mirror, console, resume=True)
    assert record.completed
    assert "starting fresh" in console.file.getvalue()


def test_pause_blocks_answers(home, clock, provider, mirror, console):
    record = _play("1", [":p", "42", ":p", "42", "256", "17"], clock, provider, mirror, console)
    assert record.completed
    # the two inputs read while paused do not count toward the first split
    assert record.segment_times[0] == 2_000
    assert "Timer is paused" in console.file.getvalue()


def test_hint_command(home, clock, provider, mirror, console):
    _play("2", [":h", ":q"], clock, provider, mirror, console)
    assert "ひらがな, カタカナ" in console.file.getvalue()


def test_unknown_puzzle(home, clock, provider, mirror, console):
    assert _play("nope", [], clock, provider, mirror, console) is None
    assert "Unknown puzzle" in console.file.getvalue()


def test_inactive_puzzle(home, clock, provider, mirror, console):
    assert _play("5", [], clock, provider, mirror, console) is None
    assert "not currently available" in console.file.getvalue()


def test_play_signs_in_anonymously(home, clock, provider, mirror, console):
    assert provider.current_identity() is None
    _play("1", [":q"], clock, provider, mirror, console)
    identity = provider.current_identity()
    assert identity is not None
    assert identity.is_anonymous


class InterruptedAdvanceManager(SessionManager):
    """Ctrl-C arrives while the run waits for the auto-advance."""

    def wait_for_advance(self, timeout=None):
        raise KeyboardInterrupt


def test_interrupt_during_advance_suspends(home, clock, provider, mirror, console):
    manager = InterruptedAdvanceManager(clock=clock)
    record = _play("1", ["42"], clock, provider, mirror, console, manager=manager)
    assert record is None
    assert "Suspended." in console.file.getvalue()
    assert not manager.advance_pending
    # the correct answer is kept and the run resumes on the next question
    suspended = mirror.load()
    assert suspended.current_question_index == 1
    assert suspended.answers[0] == "42"
    assert suspended.correct_count == 1
    assert load_runs("1") == []


def test_interrupt_during_final_advance_finishes_run(home, clock, provider, mirror, console):
    _play("1", ["42", "256"], clock, provider, mirror, console)
    manager = InterruptedAdvanceManager(clock=clock)
    record = _play("1", ["17"], clock, provider, mirror, console, manager=manager, resume=True)
    assert record.completed
    assert record.correct_count == 3
    assert "Cleared!" in console.file.getvalue()


def test_final_question_is_announced(home, clock, provider, mirror, console):
    _play("1", ["42", "256", ":q"], clock, provider, mirror, console)
    out = console.file.getvalue()
    assert out.count("Final question!") == 1
    assert out.index("Final question!") > out.index("Q3/3")
