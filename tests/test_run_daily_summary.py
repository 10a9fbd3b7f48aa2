"""Tests for the one-shot summary script."""

import threading

import pytest

from scripts import run_daily_summary


class BlockedEventSource:
    """Holds the read until released, like a calendar call that never answers."""

    def __init__(self):
        self.release = threading.Event()

    def fetch_events_for_range(self, start_ms, end_ms):
        self.release.wait(5)
        return []


@pytest.fixture
def script_orchestrator(monkeypatch, build_orchestrator, clean_registry):
    orchestrator = build_orchestrator()[0]
    monkeypatch.setattr(run_daily_summary, "build_orchestrator", lambda navigate: orchestrator)
    return orchestrator


def test_prints_summary(script_orchestrator, capsys):
    assert run_daily_summary.main(navigate=False) == 0

    out = capsys.readouterr().out
    assert "[FALLBACK_EMPTY]" in out
    assert "No events scheduled for today" in out


def test_gives_up_when_run_overruns(script_orchestrator, monkeypatch, capsys):
    source = BlockedEventSource()
    script_orchestrator.event_source = source
    monkeypatch.setattr(run_daily_summary, "run_timeout_s", lambda orchestrator: 0.05)

    try:
        assert run_daily_summary.main(navigate=False) == 1
    finally:
        source.release.set()

    assert "giving up" in capsys.readouterr().out


def test_timeout_covers_every_bounded_wait(script_orchestrator):
    settings = run_daily_summary.GeminiSettings.from_env()
    # go_home plus one launch per candidate, each up to the command limit
    navigation_s = 3 * run_daily_summary.NAVIGATOR_COMMAND_TIMEOUT_S
    ai_s = (settings.connect_timeout_ms + 2 * settings.read_timeout_ms) / 1000

    assert run_daily_summary.run_timeout_s(script_orchestrator) > (
        navigation_s + 3 + run_daily_summary.GRAPH_TIMEOUT_MS / 1000 + ai_s
    )
