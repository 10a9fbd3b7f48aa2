"""
Local-day boundaries and clock formatting for calendar occurrences.

Zones are resolved on every call and are always real IANA zones, so a
long-running process follows DST changes.
"""

import os
from datetime import datetime, time, timedelta, timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from core.config import TIME_ZONE

LOCALTIME = Path("/etc/localtime")


def _zone_from_path(path: str) -> ZoneInfo | None:
    """'/usr/share/zoneinfo/Europe/Paris' -> ZoneInfo('Europe/Paris')."""
    _, found, key = path.partition("zoneinfo/")
    if not found:
        return None
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def host_zone() -> tzinfo:
    """
    The host's IANA zone, from $TZ or the /etc/localtime link.

    Falls back to the zone data in /etc/localtime itself, then to UTC.
    """
    name = os.environ.get("TZ", "").lstrip(":")
    if name:
        zone = _zone_from_path(name) if name.startswith("/") else None
        try:
            return zone or ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown TZ '{name}', checking {LOCALTIME}")

    if LOCALTIME.exists():
        zone = _zone_from_path(str(LOCALTIME.resolve()))
        if zone is not None:
            return zone
        with LOCALTIME.open("rb") as f:
            return ZoneInfo.from_file(f, key="localtime")

    logger.warning("Could not determine the host time zone, using UTC")
    return timezone.utc


def local_zone() -> tzinfo:
    """Configured TIME_ZONE, else the host's zone."""
    if TIME_ZONE:
        return ZoneInfo(TIME_ZONE)
    return host_zone()


def day_bounds(now: datetime | None = None, tz: tzinfo | None = None) -> tuple[int, int]:
    """
    Epoch-millisecond bounds of the local day containing `now`.

    Returns:
        Tuple of (start_of_day_ms, end_of_day_ms), both inclusive.
    """
    tz = tz or local_zone()
    now = now.astimezone(tz) if now else datetime.now(tz)

    start = datetime.combine(now.date(), time.min, tzinfo=tz)
    next_start = datetime.combine(now.date() + timedelta(days=1), time.min, tzinfo=tz)
    # Midnights are whole seconds, so this stays exact across DST changes
    return int(start.timestamp()) * 1000, int(next_start.timestamp()) * 1000 - 1


def format_clock(ms: int, tz: tzinfo | None = None) -> str:
    """Format an epoch-ms instant as 'h:mm a' (e.g. '9:05 AM')."""
    moment = datetime.fromtimestamp(ms / 1000, tz=tz or local_zone())
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {meridiem}"


def format_time_range(event, tz: tzinfo | None = None) -> str:
    """Start time, plus ' - end' when the event records an end."""
    start = format_clock(event.start, tz)
    if event.end > 0:
        return f"{start} - {format_clock(event.end, tz)}"
    return start
