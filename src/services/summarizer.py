"""AI summary client for the Gemini generateContent endpoint.

Builds a prompt from today's occurrences, sends it in a single POST and
extracts the generated text. Failures are raised as SummarizerError
subclasses; `attempt` turns them into a tagged outcome so the orchestrator
can pick its fallback without relying on exceptions.

No retries happen here: one call per run, bounded by connect/read timeouts.
"""

from dataclasses import dataclass
from datetime import tzinfo
from typing import Any

import httpx
from loguru import logger

from core.clock import format_time_range
from core.config import GeminiSettings
from core.errors import (
    BadStatus,
    MalformedResponse,
    SummarizerError,
    SummarizerNotConfigured,
    SummarizerTimeout,
    TransportError,
)
from models.events import Event

PROMPT_INTRO = "I have these events scheduled for today:"
PROMPT_INSTRUCTIONS = """Please provide a brief preparatory summary of my day with:
- An overview of what's ahead
- Key things to prepare for
- Any time management tips

Keep it concise, friendly, and actionable (under 200 words)."""


@dataclass(frozen=True)
class SummaryOk:
    text: str


@dataclass(frozen=True)
class SummaryErr:
    kind: str
    message: str


SummaryOutcome = SummaryOk | SummaryErr


def build_prompt(events: list[Event], tz: tzinfo | None = None) -> str:
    """Embed each event as '<n>. <title> (<time range>)' plus optional details."""
    entries = []
    for index, event in enumerate(events, start=1):
        entry = f"{index}. {event.title} ({format_time_range(event, tz)})"
        if event.description:
            entry += f"\n   Details: {event.description}"
        entries.append(entry)

    return f"{PROMPT_INTRO}\n\n" + "\n".join(entries) + f"\n\n{PROMPT_INSTRUCTIONS}"


def parse_generate_content(payload: Any) -> str:
    """
    Extract candidates[0].content.parts[0].text from a generateContent body.

    Raises:
        MalformedResponse: on any missing field, empty array or type mismatch
    """
    try:
        candidates = payload["candidates"]
        if not isinstance(candidates, list) or not candidates:
            raise MalformedResponse("No candidates in response")

        content = candidates[0]["content"]
        parts = content["parts"]
        if not isinstance(parts, list) or not parts:
            raise MalformedResponse("No content parts in first candidate")

        text = parts[0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponse(f"Unexpected response shape: {e!r}") from e

    if not isinstance(text, str):
        raise MalformedResponse(f"Expected text to be a string, got {type(text).__name__}")
    if not text.strip():
        raise MalformedResponse("Generated text is empty")
    return text


class GeminiSummarizer:
    """Client for the text-generation endpoint.

    Args:
        settings: API key, model, host and timeouts
        transport: Optional httpx transport (tests pass httpx.MockTransport)
        tz: Zone used to format event times in the prompt
    """

    def __init__(
        self,
        settings: GeminiSettings,
        transport: httpx.BaseTransport | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._tz = tz

    @property
    def endpoint(self) -> str:
        return f"https://{self.settings.host}/v1beta/models/{self.settings.model}:generateContent"

    @property
    def timeout(self) -> httpx.Timeout:
        read_s = self.settings.read_timeout_ms / 1000
        return httpx.Timeout(read_s, connect=self.settings.connect_timeout_ms / 1000)

    def summarize(self, events: list[Event]) -> str:
        """
        Ask the endpoint for a summary of `events`.

        Raises:
            SummarizerNotConfigured: no API key
            SummarizerTimeout: connect or read timeout
            TransportError: connection-level failure
            BadStatus: non-2xx response
            MalformedResponse: unexpected body
        """
        if not self.settings.api_key:
            raise SummarizerNotConfigured("GEMINI_API_KEY is not set")

        prompt = build_prompt(events, self._tz)
        body = {"contents": [{"parts": [{"text": prompt}]}]}

        logger.debug(f"Sending summary request to {self.endpoint} ({len(events)} events)")
        try:
            with httpx.Client(transport=self._transport, timeout=self.timeout) as client:
                response = client.post(
                    self.endpoint,
                    params={"key": self.settings.api_key},
                    json=body,
                )
        except httpx.TimeoutException as e:
            raise SummarizerTimeout(f"{type(e).__name__} after {self.timeout}") from e
        except httpx.RequestError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        logger.debug(f"Summary endpoint response code: {response.status_code}")

        if not response.is_success:
            raise BadStatus(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponse("Response body is not JSON") from e

        return parse_generate_content(payload)

    def attempt(self, events: list[Event]) -> SummaryOutcome:
        """Tagged-outcome form of `summarize`; never raises SummarizerError."""
        try:
            return SummaryOk(self.summarize(events))
        except SummarizerError as e:
            if isinstance(e, BadStatus):
                logger.warning(f"Summary endpoint returned {e.status_code}: {e.body[:500]}")
            return SummaryErr(kind=e.kind, message=str(e))
