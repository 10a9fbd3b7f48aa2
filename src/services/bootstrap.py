"""
Wire the orchestrator from configuration.
"""

from loguru import logger

from core.config import NAVIGATOR, GeminiSettings
from services.calendar import GraphEventSource
from services.navigator import DesktopNavigator, NullNavigator
from services.orchestrator import AutomationOrchestrator
from services.summarizer import GeminiSummarizer


def build_orchestrator(navigate: bool | None = None) -> AutomationOrchestrator:
    """
    Build an orchestrator with the configured collaborators.

    Args:
        navigate: Override the NAVIGATOR setting (False disables desktop actions)
    """
    if navigate is None:
        navigate = NAVIGATOR != "none"

    settings = GeminiSettings.from_env()
    if not settings.api_key:
        logger.warning("GEMINI_API_KEY is not set; summaries will use the basic template")

    # No fixed tz: "today" and event times follow the host zone on every run
    return AutomationOrchestrator(
        navigator=DesktopNavigator() if navigate else NullNavigator(),
        event_source=GraphEventSource(),
        summarizer=GeminiSummarizer(settings),
    )
