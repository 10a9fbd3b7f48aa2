"""Per-request logging for the API."""

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from loguru import logger


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    summary_source: str | None = None
    summary_length: int | None = None


def log_request(log: RequestLog) -> None:
    """Write one structured log record for the request."""
    level = "INFO" if log.status_code < 400 else "WARNING"
    logger.bind(**asdict(log)).log(
        level,
        f"{log.method} {log.endpoint} -> {log.status_code} "
        f"({log.processing_time_ms} ms, source={log.summary_source})",
    )
