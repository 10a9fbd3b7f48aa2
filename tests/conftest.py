"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
from faker import Faker

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.errors import NavigatorActionFailed
from models.events import Event
from services import orchestrator as orchestrator_module
from services.orchestrator import AutomationOrchestrator
from services.summarizer import SummaryOk

UTC = ZoneInfo("UTC")
DAY = datetime(2025, 11, 3, tzinfo=UTC)


def at(hour: int, minute: int = 0) -> int:
    """Epoch ms for a time of day on DAY (UTC)."""
    return int((DAY + timedelta(hours=hour, minutes=minute)).timestamp() * 1000)


# =============================================================================
# FAKE COLLABORATORS
# =============================================================================


class RecordingNavigator:
    def __init__(self, log, fail_home=False, fail_launch=False, launched=True):
        self.log = log
        self.fail_home = fail_home
        self.fail_launch = fail_launch
        self.launched = launched

    def go_home(self):
        self.log.append("go_home")
        if self.fail_home:
            raise NavigatorActionFailed("home action refused")

    def launch_application(self, candidates):
        self.log.append(("launch", tuple(candidates)))
        if self.fail_launch:
            raise NavigatorActionFailed("launch refused")
        return self.launched


class StaticEventSource:
    def __init__(self, log, events=(), error=None):
        self.log = log
        self.events = list(events)
        self.error = error

    def fetch_events_for_range(self, start_ms, end_ms):
        self.log.append(("fetch", start_ms, end_ms))
        if self.error:
            raise self.error
        return list(self.events)


class ScriptedSummarizer:
    """Returns (or raises) a fixed outcome from attempt()."""

    def __init__(self, log, outcome):
        self.log = log
        self.outcome = outcome
        self.calls = []

    def attempt(self, events):
        self.log.append("summarize")
        self.calls.append(list(events))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class RecordingWaiter:
    def __init__(self, log):
        self.log = log

    def wait(self, ms):
        self.log.append(("wait", ms))


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def utc():
    return UTC


@pytest.fixture
def day():
    return DAY


@pytest.fixture
def at_time():
    return at


@pytest.fixture
def make_event():
    """Factory for events on DAY."""

    def _make(title="Standup", hour=9, minute=0, duration_min=30, description=""):
        start = at(hour, minute)
        end = start + duration_min * 60_000 if duration_min else 0
        return Event(title=title, start=start, end=end, description=description)

    return _make


@pytest.fixture
def sample_events(make_event):
    """Three ordered events with generated titles and details."""
    fake = Faker()
    Faker.seed(1234)
    return [
        make_event(title=fake.catch_phrase(), hour=9, duration_min=30),
        make_event(title=fake.catch_phrase(), hour=11, duration_min=60, description=fake.sentence()),
        make_event(title=fake.catch_phrase(), hour=15, minute=30, duration_min=0),
    ]


@pytest.fixture
def build_orchestrator():
    """
    Factory returning (orchestrator, log, summarizer) wired with fakes and a
    zero-delay waiter. Every collaborator appends to the same log, so tests
    can assert step order.
    """

    def _build(events=(), outcome=SummaryOk("AI summary"), source_error=None, **navigator_kwargs):
        log = []
        summarizer = ScriptedSummarizer(log, outcome)
        orchestrator = AutomationOrchestrator(
            navigator=RecordingNavigator(log, **navigator_kwargs),
            event_source=StaticEventSource(log, events, error=source_error),
            summarizer=summarizer,
            waiter=RecordingWaiter(log),
            app_candidates=["com.microsoft.Outlook", "com.apple.iCal"],
            tz=UTC,
            clock=lambda: DAY + timedelta(hours=15),
        )
        return orchestrator, log, summarizer

    return _build


@pytest.fixture
def clean_registry():
    """Leave the service registry empty after the test."""
    orchestrator_module.deactivate()
    yield
    orchestrator_module.deactivate()
