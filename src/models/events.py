"""
Data models for calendar occurrences and automation runs.

Event and SummaryResult are immutable values handed between components;
AutomationRun is the per-invocation state owned by one worker thread.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TypedDict

from loguru import logger

NO_TITLE = "No Title"


class CalendarInfo(TypedDict):
    """Calendar discovery result."""
    user_id: str
    calendar_id: str
    calendar_name: str
    is_default: bool


@dataclass(frozen=True)
class Event:
    """One concrete calendar occurrence (recurring series already expanded)."""

    title: str
    start: int  # epoch ms
    end: int = 0  # epoch ms, 0 = no end recorded
    description: str = ""

    @property
    def has_end(self) -> bool:
        return self.end > 0


class SummarySource(str, Enum):
    """How a summary text was produced."""

    AI = "AI"
    FALLBACK_EMPTY = "FALLBACK_EMPTY"
    FALLBACK_BASIC = "FALLBACK_BASIC"
    FALLBACK_ERROR = "FALLBACK_ERROR"


@dataclass(frozen=True)
class SummaryResult:
    """The single output of one automation run."""

    text: str
    source: SummarySource

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise ValueError("SummaryResult text must be non-empty")


class RunPhase(str, Enum):
    NAVIGATING_HOME = "NAVIGATING_HOME"
    OPENING_TARGET = "OPENING_TARGET"
    READING_EVENTS = "READING_EVENTS"
    SUMMARIZING = "SUMMARIZING"
    RETURNING_HOME = "RETURNING_HOME"
    DONE = "DONE"
    FAILED = "FAILED"


@dataclass
class AutomationRun:
    """Transient state of one orchestration invocation."""

    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    phase: RunPhase = RunPhase.NAVIGATING_HOME
    started_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    event_count: int | None = None
    error: str | None = None

    def advance(self, phase: RunPhase) -> None:
        logger.debug(f"Run {self.run_id}: {self.phase.value} -> {phase.value}")
        self.phase = phase
