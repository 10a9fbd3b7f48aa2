#!/usr/bin/env python3
"""
Run the daily calendar automation once and print today's summary.

Goes home, opens the calendar app, reads today's events from MS365,
summarizes them (AI first, template fallback) and goes home again.

Usage:
    uv run python src/scripts/run_daily_summary.py
    uv run python src/scripts/run_daily_summary.py --no-navigate --log-level DEBUG
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import (
    GRAPH_TIMEOUT_MS,
    LOG_FILE,
    LOG_LEVEL,
    NAVIGATOR_COMMAND_TIMEOUT_S,
    GeminiSettings,
)
from core.logger import setup_logger
from services.bootstrap import build_orchestrator
from services.orchestrator import activate, deactivate, get_active

RUN_MARGIN_S = 10


def run_timeout_s(orchestrator) -> float:
    """
    Longest a run can take before its result is delivered.

    Sums every bounded wait: one desktop command per navigation attempt, the
    settle delays before the read, the Graph read and the AI request (connect,
    then write and read each up to the read timeout).
    """
    settings = GeminiSettings.from_env()
    commands = 1 + len(orchestrator.app_candidates)
    return (
        commands * NAVIGATOR_COMMAND_TIMEOUT_S
        + (orchestrator.home_settle_ms + orchestrator.launch_settle_ms + GRAPH_TIMEOUT_MS) / 1000
        + (settings.connect_timeout_ms + 2 * settings.read_timeout_ms) / 1000
        + RUN_MARGIN_S
    )


def main(navigate: bool = True) -> int:
    """Main entry point."""
    activate(build_orchestrator(navigate=navigate))
    try:
        orchestrator = get_active()
        if orchestrator is None:
            print("Automation service is not active")
            return 1

        timeout = run_timeout_s(orchestrator)
        handle = orchestrator.run()
        try:
            result = handle.result(timeout=timeout)
        except TimeoutError:
            print(f"No summary after {timeout:.0f}s, giving up")
            return 1

        print(f"\n[{result.source.value}]\n")
        print(result.text)

        # Let the final go-home happen before the process exits
        handle.wait_for_cleanup(timeout=10)
        return 0
    finally:
        deactivate()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the daily calendar summary")
    parser.add_argument(
        "--no-navigate",
        action="store_true",
        help="Skip desktop actions (go home / open calendar app)",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="DEBUG, INFO, WARNING, ...")
    args = parser.parse_args()

    setup_logger(level=args.log_level.upper(), log_file=LOG_FILE or None)
    sys.exit(main(navigate=not args.no_navigate))
