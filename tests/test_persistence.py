"""JSON session mirror."""

from nazorun.session import SessionManager


def test_mirror_tracks_mutations(mirror, clock):
    manager = SessionManager(observers=[mirror], clock=clock)
    manager.start("1", 3)
    manager.submit_answer("42", True)
    manager.record_segment_time(0, 1_234)
    saved = mirror.load()
    assert saved == manager.session


def test_mirror_removed_on_clear(mirror, clock):
    manager = SessionManager(observers=[mirror], clock=clock)
    manager.start("1", 1)
    assert mirror.path.exists()
    manager.clear()
    assert not mirror.path.exists()
    assert mirror.load() is None


def test_mirror_round_trip_preserves_completion(mirror, clock):
    manager = SessionManager(observers=[mirror], clock=clock)
    manager.start("1", 1)
    clock.advance(5_000)
    manager.next_question()
    saved = mirror.load()
    assert saved.is_completed
    assert saved.total_time_ms == 5_000
    assert saved.completed_at == manager.session.completed_at


def test_unreadable_mirror_is_none(mirror):
    mirror.path.write_text("[]", encoding="utf-8")
    assert mirror.load() is None
    mirror.path.write_text("{broken", encoding="utf-8")
    assert mirror.load() is None


def test_restored_session_keeps_mirroring(mirror, clock):
    manager = SessionManager(observers=[mirror], clock=clock)
    manager.start("1", 2)
    manager.next_question()
    saved = mirror.load()

    fresh = SessionManager(observers=[mirror], clock=clock)
    assert fresh.restore(saved)
    fresh.next_question()
    assert mirror.load().is_completed
