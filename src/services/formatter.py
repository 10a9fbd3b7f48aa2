"""
Deterministic, template-based day summary (no external calls).
"""

from datetime import tzinfo

from core.clock import format_clock
from models.events import Event

NO_EVENTS_MESSAGE = "No events scheduled for today. Enjoy your free day!"


def format_summary(events: list[Event], tz: tzinfo | None = None) -> str:
    """
    Build the fallback summary: a count header, then one numbered entry per
    event in input order with its time range and, when present, details.
    """
    lines = ["Your Day Ahead:", "", f"You have {len(events)} event(s) today:", ""]

    for index, event in enumerate(events, start=1):
        lines.append(f"{index}. {event.title}")
        time_line = f"   Time: {format_clock(event.start, tz)}"
        if event.end > 0:
            time_line += f" - {format_clock(event.end, tz)}"
        lines.append(time_line)
        if event.description:
            lines.append(f"   Details: {event.description}")
        lines.append("")

    return "\n".join(lines) + "\n"
