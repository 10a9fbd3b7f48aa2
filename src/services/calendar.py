"""
Calendar occurrences from MS Graph.

Uses the calendar view, which expands recurring series into the concrete
instances that fall inside the requested window.
"""

import asyncio
from datetime import datetime, timezone, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from core.config import GRAPH_CALENDAR_ID, GRAPH_TIMEOUT_MS, GRAPH_USER_ID
from core.errors import DataSourceUnavailable
from core.graph_client import create_graph_client, get_graph_client
from models.events import NO_TITLE, CalendarInfo, Event

PAGE_SIZE = 100


class EventSource(Protocol):
    def fetch_events_for_range(self, start_ms: int, end_ms: int) -> list[Event]: ...


def _to_graph_timestamp(ms: int) -> str:
    moment = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _parse_graph_datetime(value: str, zone_name: str | None) -> int:
    """Convert Graph's dateTime ('2025-11-01T09:00:00.0000000') to epoch ms."""
    # Graph sends 7 fractional digits; datetime accepts at most 6
    base, _, fraction = value.rstrip("Z").partition(".")
    moment = datetime.fromisoformat(f"{base}.{fraction[:6]:0<6}")

    zone: tzinfo = timezone.utc
    if zone_name and zone_name.upper() != "UTC":
        try:
            zone = ZoneInfo(zone_name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown time zone '{zone_name}', assuming UTC")
    return int(moment.replace(tzinfo=zone).timestamp() * 1000)


def parse_event(event) -> Event:
    """Parse an MS Graph event into an Event."""
    title = (event.subject or "").strip() or NO_TITLE

    start_ms = 0
    if event.start and event.start.date_time:
        start_ms = _parse_graph_datetime(event.start.date_time, event.start.time_zone)

    end_ms = 0
    if event.end and event.end.date_time:
        end_ms = _parse_graph_datetime(event.end.date_time, event.end.time_zone)

    description = (event.body_preview or "").strip()

    return Event(title=title, start=start_ms, end=end_ms, description=description)


class GraphEventSource:
    """Reads one user's calendar through the MS Graph calendar view.

    Never raises: permission, credential and query failures are logged and
    produce an empty list, as does a read that exceeds `timeout_ms`.
    """

    def __init__(
        self,
        user_id: str = GRAPH_USER_ID,
        calendar_id: str = GRAPH_CALENDAR_ID,
        timeout_ms: int = GRAPH_TIMEOUT_MS,
    ):
        self.user_id = user_id
        self.calendar_id = calendar_id
        self.timeout_ms = timeout_ms

    def fetch_events_for_range(self, start_ms: int, end_ms: int) -> list[Event]:
        logger.info("=== Starting Calendar Read ===")
        try:
            if not self.user_id:
                raise DataSourceUnavailable("GRAPH_USER_ID is not configured")
            events = asyncio.run(
                asyncio.wait_for(self._fetch(start_ms, end_ms), self.timeout_ms / 1000)
            )
        except TimeoutError:
            logger.error(f"Calendar read timed out after {self.timeout_ms} ms")
            return []
        except Exception as e:
            logger.error(f"Error reading calendar: {e!r}")
            return []

        logger.info(f"Total events found: {len(events)}")
        return events

    def _calendar_view(self, graph):
        user = graph.users.by_user_id(self.user_id)
        if self.calendar_id:
            return user.calendars.by_calendar_id(self.calendar_id).calendar_view
        return user.calendar_view

    async def _fetch(self, start_ms: int, end_ms: int) -> list[Event]:
        from kiota_abstractions.base_request_configuration import RequestConfiguration
        from msgraph.generated.users.item.calendar_view.calendar_view_request_builder import (
            CalendarViewRequestBuilder,
        )

        query_params = CalendarViewRequestBuilder.CalendarViewRequestBuilderGetQueryParameters(
            start_date_time=_to_graph_timestamp(start_ms),
            end_date_time=_to_graph_timestamp(end_ms),
            select=["subject", "start", "end", "bodyPreview"],
            orderby=["start/dateTime"],
            top=PAGE_SIZE,
        )
        config = RequestConfiguration(query_parameters=query_params)
        config.headers.add("Prefer", 'outlook.timezone="UTC"')

        graph = create_graph_client()
        view = self._calendar_view(graph)
        response = await view.get(request_configuration=config)

        events = []
        while response is not None:
            for raw in response.value or []:
                events.append(parse_event(raw))
                logger.debug(f"Found event: {events[-1].title}")

            if not response.odata_next_link:
                break
            response = await view.with_url(response.odata_next_link).get()

        # Pages arrive in order; sort keeps the ascending-start guarantee if they overlap
        return sorted(events, key=lambda e: e.start)


async def discover_calendars(user_id: str = GRAPH_USER_ID) -> list[CalendarInfo]:
    """List the calendars owned by a user."""
    graph = get_graph_client()
    calendars_response = await graph.users.by_user_id(user_id).calendars.get()
    calendars = calendars_response.value if calendars_response.value else []

    return [
        {
            "user_id": user_id,
            "calendar_id": calendar.id,
            "calendar_name": calendar.name or "",
            "is_default": bool(calendar.is_default_calendar),
        }
        for calendar in calendars
    ]
