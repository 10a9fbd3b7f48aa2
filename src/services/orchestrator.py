"""
Daily automation orchestrator.

Drives one run per `run()` call on its own worker thread:

    go home -> open calendar app -> read today's events -> summarize -> go home

and delivers exactly one SummaryResult through the returned RunHandle (and the
optional `on_complete` callback). A failing AI call falls back to the
template summary; any unexpected failure becomes a FALLBACK_ERROR result.
Nothing is retried and runs share no mutable state.

The process-wide registry at the bottom holds the orchestrator that callers
(API, scripts) should use while the service is active.
"""

import threading
import time
from collections.abc import Callable
from concurrent.futures import Future
from datetime import datetime, tzinfo
from typing import Protocol

from loguru import logger

from core.clock import day_bounds
from core.config import (
    CALENDAR_APP_CANDIDATES,
    HOME_SETTLE_MS,
    LAUNCH_SETTLE_MS,
    RETURN_SETTLE_MS,
)
from core.errors import NavigatorActionFailed
from models.events import AutomationRun, Event, RunPhase, SummaryResult, SummarySource
from services.calendar import EventSource
from services.formatter import NO_EVENTS_MESSAGE, format_summary
from services.navigator import SystemNavigator
from services.summarizer import SummaryOk, SummaryOutcome


class Waiter(Protocol):
    def wait(self, ms: int) -> None: ...


class SleepWaiter:
    """Blocks the calling (worker) thread for the settle delay."""

    def wait(self, ms: int) -> None:
        time.sleep(ms / 1000)


class Summarizer(Protocol):
    def attempt(self, events: list[Event]) -> SummaryOutcome: ...


class RunHandle:
    """One-shot completion handle for a single run.

    Resolves exactly once; `on_complete` runs on the worker thread, so callers
    owning other state (an event loop, a UI) should hand the result off rather
    than mutate that state from the callback.
    """

    def __init__(self, on_complete: Callable[[SummaryResult], None] | None = None):
        self._on_complete = on_complete
        self._future: Future = Future()
        self._lock = threading.Lock()
        self._completed = False
        self._cleanup: threading.Thread | None = None

    @property
    def future(self) -> Future:
        return self._future

    def complete(self, result: SummaryResult) -> bool:
        """Deliver `result`; returns False if the run already completed."""
        with self._lock:
            if self._completed:
                logger.warning("Run already completed, dropping second result")
                return False
            self._completed = True

        if self._on_complete is not None:
            try:
                self._on_complete(result)
            except Exception:
                logger.exception("Completion callback raised")

        self._future.set_result(result)
        return True

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> SummaryResult:
        return self._future.result(timeout=timeout)

    def wait_for_cleanup(self, timeout: float | None = None) -> bool:
        """Join the best-effort return-home action; True once it has finished."""
        cleanup = self._cleanup
        if cleanup is None:
            return True
        cleanup.join(timeout)
        return not cleanup.is_alive()


class AutomationOrchestrator:
    """Runs the daily calendar routine.

    Args:
        navigator: Performs go-home and app-launch actions
        event_source: Returns today's ordered occurrences; never raises
        summarizer: AI client exposing `attempt(events)`
        waiter: Settle-delay implementation (tests pass a zero-delay one)
        app_candidates: Calendar app identifiers, tried in order
        tz: Zone defining "today" and used for time formatting
        clock: Returns the current time; defaults to now in `tz`
    """

    def __init__(
        self,
        navigator: SystemNavigator,
        event_source: EventSource,
        summarizer: Summarizer,
        waiter: Waiter | None = None,
        app_candidates: list[str] | None = None,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
        home_settle_ms: int = HOME_SETTLE_MS,
        launch_settle_ms: int = LAUNCH_SETTLE_MS,
        return_settle_ms: int = RETURN_SETTLE_MS,
    ):
        self.navigator = navigator
        self.event_source = event_source
        self.summarizer = summarizer
        self.waiter = waiter or SleepWaiter()
        self.app_candidates = list(
            CALENDAR_APP_CANDIDATES if app_candidates is None else app_candidates
        )
        self.tz = tz
        self.clock = clock
        self.home_settle_ms = home_settle_ms
        self.launch_settle_ms = launch_settle_ms
        self.return_settle_ms = return_settle_ms

    def run(self, on_complete: Callable[[SummaryResult], None] | None = None) -> RunHandle:
        """Start a run on a new worker thread and return immediately."""
        run = AutomationRun()
        handle = RunHandle(on_complete)

        worker = threading.Thread(
            target=self._execute,
            args=(run, handle),
            name=f"automation-{run.run_id}",
            daemon=True,
        )
        worker.start()
        logger.info(f"Started automation run {run.run_id}")
        return handle

    # -------------------------------------------------------------------------
    # Worker
    # -------------------------------------------------------------------------

    def _execute(self, run: AutomationRun, handle: RunHandle) -> None:
        failed = False
        try:
            result = self._run_steps(run)
        except Exception as e:
            logger.exception(f"Automation error during {run.phase.value}")
            failed = True
            run.error = str(e) or type(e).__name__
            result = SummaryResult(
                f"Error generating summary: {run.error}", SummarySource.FALLBACK_ERROR
            )

        try:
            run.advance(RunPhase.RETURNING_HOME)
            handle._cleanup = self._return_home(run)

            run.advance(RunPhase.FAILED if failed else RunPhase.DONE)
            logger.info(f"Run {run.run_id} finished: {result.source.value}")
        except Exception:
            logger.exception(f"Run {run.run_id} failed while finishing")
        finally:
            handle.complete(result)

    def _run_steps(self, run: AutomationRun) -> SummaryResult:
        run.advance(RunPhase.NAVIGATING_HOME)
        self._navigate(self.navigator.go_home)
        self.waiter.wait(self.home_settle_ms)

        run.advance(RunPhase.OPENING_TARGET)
        launched = self._navigate(self.navigator.launch_application, self.app_candidates)
        if not launched:
            logger.warning("Calendar app could not be opened, reading events anyway")
        self.waiter.wait(self.launch_settle_ms)

        run.advance(RunPhase.READING_EVENTS)
        now = self.clock() if self.clock else None
        start_ms, end_ms = day_bounds(now, self.tz)
        events = self.event_source.fetch_events_for_range(start_ms, end_ms)
        run.event_count = len(events)

        if not events:
            logger.info("No events today")
            return SummaryResult(NO_EVENTS_MESSAGE, SummarySource.FALLBACK_EMPTY)

        run.advance(RunPhase.SUMMARIZING)
        logger.info(f"Generating AI summary for {len(events)} events...")
        outcome = self.summarizer.attempt(events)
        if isinstance(outcome, SummaryOk):
            logger.info("AI summary ready")
            return SummaryResult(outcome.text, SummarySource.AI)

        logger.warning(f"AI failed ({outcome.kind}), using basic summary: {outcome.message}")
        return SummaryResult(format_summary(events, self.tz), SummarySource.FALLBACK_BASIC)

    def _navigate(self, action, *args):
        try:
            return action(*args)
        except NavigatorActionFailed as e:
            logger.warning(f"Navigation action failed: {e}")
            return None

    def _return_home(self, run: AutomationRun) -> threading.Thread | None:
        """Issue the final go-home without holding up delivery."""

        def cleanup():
            self.waiter.wait(self.return_settle_ms)
            try:
                self.navigator.go_home()
            except Exception as e:
                logger.warning(f"Return home failed for run {run.run_id}: {e}")

        thread = threading.Thread(target=cleanup, name=f"automation-{run.run_id}-home", daemon=True)
        try:
            thread.start()
        except RuntimeError as e:
            logger.error(f"Could not start return-home action: {e}")
            return None
        return thread


# =============================================================================
# SERVICE REGISTRY
# =============================================================================

_active: AutomationOrchestrator | None = None
_registry_lock = threading.Lock()


def activate(orchestrator: AutomationOrchestrator) -> None:
    """Make `orchestrator` the active service instance."""
    global _active
    with _registry_lock:
        if _active is not None and _active is not orchestrator:
            logger.warning("Replacing the active orchestrator")
        _active = orchestrator
    logger.info("Automation service activated")


def deactivate(orchestrator: AutomationOrchestrator | None = None) -> None:
    """Clear the slot (only if it still holds `orchestrator`, when given)."""
    global _active
    with _registry_lock:
        if orchestrator is None or _active is orchestrator:
            _active = None
            logger.info("Automation service deactivated")


def get_active() -> AutomationOrchestrator | None:
    return _active


def is_active() -> bool:
    return _active is not None
