"""
Error types raised inside the automation pipeline.

Only the summarizer errors cross a component boundary; the orchestrator turns
them into a fallback decision, so callers never see any of these raised.
"""


class DayPlannerError(Exception):
    """Base class for every error this project raises."""


class SummarizerError(DayPlannerError):
    """The AI summary could not be produced."""

    kind = "ERROR"


class SummarizerTimeout(SummarizerError):
    """Connect or read timeout while talking to the endpoint."""

    kind = "TIMEOUT"


class TransportError(SummarizerError):
    """Connection-level failure (DNS, refused connection, TLS, ...)."""

    kind = "TRANSPORT_ERROR"


class BadStatus(SummarizerError):
    """The endpoint answered with a non-2xx status."""

    kind = "BAD_STATUS"

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {body[:200]}")


class MalformedResponse(SummarizerError):
    """The 2xx body did not have the expected shape."""

    kind = "MALFORMED_RESPONSE"


class SummarizerNotConfigured(SummarizerError):
    """No API key is configured, so no request is attempted."""

    kind = "NOT_CONFIGURED"


class DataSourceUnavailable(DayPlannerError):
    """Calendar permission or query failure; absorbed into an empty result."""


class NavigatorActionFailed(DayPlannerError):
    """A best-effort navigation action failed; logged and ignored."""
