"""Shared fixtures: an isolated NAZORUN_HOME and a controllable clock."""

import pytest

from nazorun.identity import IdentityProvider
from nazorun.persistence import JsonSessionMirror


class FakeClock:
    """Epoch-ms clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point every configured path at a temporary directory."""
    monkeypatch.setenv("NAZORUN_HOME", str(tmp_path))
    monkeypatch.delenv("NAZORUN_RESULTS_DIR", raising=False)
    monkeypatch.setenv("NAZORUN_ADVANCE_DELAY_MS", "0")
    return tmp_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider(home):
    return IdentityProvider(home / "identity.json")


@pytest.fixture
def mirror(home):
    return JsonSessionMirror(home / "session.json")
