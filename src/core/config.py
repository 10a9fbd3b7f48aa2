"""
Configuration constants and environment setup.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
LOG_DIR = PROJECT_ROOT / "logs"

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.environ.get("LOG_FILE", "")

# =============================================================================
# AUTOMATION SEQUENCE
# =============================================================================

# Settle delays after OS-level actions that give no completion signal
HOME_SETTLE_MS = int(os.environ.get("HOME_SETTLE_MS", "1000"))
LAUNCH_SETTLE_MS = int(os.environ.get("LAUNCH_SETTLE_MS", "2000"))
RETURN_SETTLE_MS = int(os.environ.get("RETURN_SETTLE_MS", "2000"))

# Calendar apps tried in order (macOS bundle ids / Linux desktop ids)
DEFAULT_CALENDAR_APPS = [
    "com.microsoft.Outlook",
    "com.apple.iCal",
    "org.gnome.Calendar",
    "org.kde.merkuro.calendar",
]
CALENDAR_APP_CANDIDATES = [
    app.strip()
    for app in os.environ.get("CALENDAR_APP_CANDIDATES", ",".join(DEFAULT_CALENDAR_APPS)).split(",")
    if app.strip()
]
CALENDAR_FALLBACK_URL = os.environ.get(
    "CALENDAR_FALLBACK_URL", "https://outlook.office.com/calendar/view/day"
)

# "desktop" drives the local desktop, "none" skips navigation (headless hosts)
NAVIGATOR = os.environ.get("NAVIGATOR", "desktop").lower()

# Limit on each desktop command (osascript, open, wmctrl, gtk-launch)
NAVIGATOR_COMMAND_TIMEOUT_S = int(os.environ.get("NAVIGATOR_COMMAND_TIMEOUT_S", "10"))

# IANA zone name; empty means the host's local zone
TIME_ZONE = os.environ.get("TIME_ZONE", "")

# =============================================================================
# AI SUMMARY (from environment)
# =============================================================================

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_HOST = os.environ.get("GEMINI_HOST", "generativelanguage.googleapis.com")
GEMINI_CONNECT_TIMEOUT_MS = int(os.environ.get("GEMINI_CONNECT_TIMEOUT_MS", "15000"))
GEMINI_READ_TIMEOUT_MS = int(os.environ.get("GEMINI_READ_TIMEOUT_MS", "15000"))


@dataclass(frozen=True)
class GeminiSettings:
    """Connection settings for the text-generation endpoint."""

    api_key: str
    model: str = "gemini-2.5-flash"
    host: str = "generativelanguage.googleapis.com"
    connect_timeout_ms: int = 15000
    read_timeout_ms: int = 15000

    @classmethod
    def from_env(cls) -> "GeminiSettings":
        return cls(
            api_key=GEMINI_API_KEY,
            model=GEMINI_MODEL,
            host=GEMINI_HOST,
            connect_timeout_ms=GEMINI_CONNECT_TIMEOUT_MS,
            read_timeout_ms=GEMINI_READ_TIMEOUT_MS,
        )


# =============================================================================
# MS GRAPH CREDENTIALS (from environment)
# =============================================================================

GRAPH_TENANT_ID = os.environ.get("MICROSOFT_GRAPH_TENANT_ID", "")
GRAPH_APP_ID = os.environ.get("MICROSOFT_GRAPH_APP_ID", "")
GRAPH_CLIENT_SECRET = os.environ.get("MICROSOFT_GRAPH_CLIENT_SECRET", "")

# Whose calendar is summarized; empty calendar id means the default calendar
GRAPH_USER_ID = os.environ.get("GRAPH_USER_ID", "")
GRAPH_CALENDAR_ID = os.environ.get("GRAPH_CALENDAR_ID", "")

# Limit on one calendar read, all pages included
GRAPH_TIMEOUT_MS = int(os.environ.get("GRAPH_TIMEOUT_MS", "20000"))

# =============================================================================
# API CONFIGURATION
# =============================================================================

DAYPLANNER_API_KEY = os.environ.get("DAYPLANNER_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
