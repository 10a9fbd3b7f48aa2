"""Tests for the MS Graph event source."""

import asyncio
from types import SimpleNamespace

import pytest

from models.events import Event
from services import calendar
from services.calendar import GraphEventSource, _to_graph_timestamp, parse_event


def graph_event(subject="Standup", start="2025-11-03T09:00:00.0000000", end="2025-11-03T09:30:00.0000000",
                zone="UTC", preview=""):
    return SimpleNamespace(
        subject=subject,
        start=SimpleNamespace(date_time=start, time_zone=zone) if start else None,
        end=SimpleNamespace(date_time=end, time_zone=zone) if end else None,
        body_preview=preview,
    )


class FakeView:
    """Stands in for a calendarView request builder; serves pages in order."""

    def __init__(self, pages, requests):
        self.pages = pages
        self.requests = requests

    async def get(self, request_configuration=None):
        self.requests.append(request_configuration)
        return self.pages.pop(0)

    def with_url(self, url):
        self.requests.append(url)
        return self


def fake_graph(pages, requests, calendars_seen=None):
    view = FakeView(pages, requests)

    def by_calendar_id(calendar_id):
        calendars_seen.append(calendar_id)
        return SimpleNamespace(calendar_view=view)

    user = SimpleNamespace(
        calendar_view=view,
        calendars=SimpleNamespace(by_calendar_id=by_calendar_id),
    )
    return SimpleNamespace(users=SimpleNamespace(by_user_id=lambda user_id: user))


def page(events, next_link=None):
    return SimpleNamespace(value=events, odata_next_link=next_link)


class TestParseEvent:
    def test_maps_fields(self, at_time):
        event = parse_event(graph_event(preview="  Bring the burndown chart "))

        assert event == Event(
            title="Standup",
            start=at_time(9),
            end=at_time(9, 30),
            description="Bring the burndown chart",
        )

    def test_missing_title_gets_placeholder(self):
        assert parse_event(graph_event(subject=None)).title == "No Title"
        assert parse_event(graph_event(subject="   ")).title == "No Title"

    def test_missing_end_is_zero(self):
        assert parse_event(graph_event(end=None)).end == 0

    def test_named_zone(self, at_time):
        event = parse_event(graph_event(start="2025-11-03T09:00:00.0000000", zone="America/New_York"))

        assert event.start == at_time(14)

    def test_unknown_zone_falls_back_to_utc(self, at_time):
        event = parse_event(graph_event(zone="Pacific Standard Time"))

        assert event.start == at_time(9)


class TestFetchEventsForRange:
    def test_reads_every_page(self, monkeypatch, at_time):
        requests = []
        pages = [
            page([graph_event("Standup")], next_link="https://graph.microsoft.com/next"),
            page([graph_event("Lunch", "2025-11-03T12:00:00.0000000", "2025-11-03T13:00:00.0000000")]),
        ]
        monkeypatch.setattr(calendar, "create_graph_client", lambda: fake_graph(pages, requests))

        events = GraphEventSource(user_id="me@example.com").fetch_events_for_range(at_time(0), at_time(24) - 1)

        assert [e.title for e in events] == ["Standup", "Lunch"]
        assert "https://graph.microsoft.com/next" in requests

    def test_queries_configured_calendar(self, monkeypatch, at_time):
        requests, calendars_seen = [], []
        monkeypatch.setattr(
            calendar, "create_graph_client", lambda: fake_graph([page([])], requests, calendars_seen)
        )

        source = GraphEventSource(user_id="me@example.com", calendar_id="cal-42")
        assert source.fetch_events_for_range(at_time(0), at_time(24) - 1) == []
        assert calendars_seen == ["cal-42"]

    def test_results_are_ordered_by_start(self, monkeypatch, at_time):
        pages = [
            page([
                graph_event("Late", "2025-11-03T16:00:00.0000000", None),
                graph_event("Early", "2025-11-03T08:00:00.0000000", None),
            ])
        ]
        monkeypatch.setattr(calendar, "create_graph_client", lambda: fake_graph(pages, []))

        events = GraphEventSource(user_id="me").fetch_events_for_range(at_time(0), at_time(24) - 1)

        assert [e.title for e in events] == ["Early", "Late"]

    def test_failures_yield_empty_list(self, monkeypatch, at_time):
        def broken():
            raise RuntimeError("MS Graph credentials are not configured")

        monkeypatch.setattr(calendar, "create_graph_client", broken)

        assert GraphEventSource(user_id="me").fetch_events_for_range(at_time(0), at_time(24)) == []

    def test_missing_user_yields_empty_list(self, monkeypatch, at_time):
        calls = []
        monkeypatch.setattr(calendar, "create_graph_client", lambda: calls.append(1))

        assert GraphEventSource(user_id="").fetch_events_for_range(at_time(0), at_time(24)) == []
        assert calls == []

    def test_slow_read_times_out(self, monkeypatch, at_time):
        class StalledView(FakeView):
            async def get(self, request_configuration=None):
                await asyncio.sleep(5)

        graph = fake_graph([], [])
        graph.users.by_user_id("me").calendar_view = StalledView([], [])
        monkeypatch.setattr(calendar, "create_graph_client", lambda: graph)

        source = GraphEventSource(user_id="me", timeout_ms=50)

        assert source.fetch_events_for_range(at_time(0), at_time(24) - 1) == []


@pytest.mark.parametrize(
    "hour,minute,expected",
    [(0, 0, "2025-11-03T00:00:00.000Z"), (23, 59, "2025-11-03T23:59:00.000Z")],
)
def test_graph_timestamp(at_time, hour, minute, expected):
    assert _to_graph_timestamp(at_time(hour, minute)) == expected
