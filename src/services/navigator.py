"""
Desktop navigation actions: show the desktop and launch the calendar app.

The actions are asynchronous at the OS level and report no readiness, so the
orchestrator follows each one with a settle delay.
"""

import platform
import subprocess
import webbrowser
from typing import Protocol

from loguru import logger

from core.config import CALENDAR_FALLBACK_URL, NAVIGATOR_COMMAND_TIMEOUT_S
from core.errors import NavigatorActionFailed

# Hide every visible app except Finder, which leaves the desktop in front
_MACOS_SHOW_DESKTOP = (
    'tell application "System Events" to set visible of every process '
    'whose visible is true and name is not "Finder" to false'
)


class SystemNavigator(Protocol):
    def go_home(self) -> None: ...

    def launch_application(self, candidates: list[str]) -> bool: ...


def _run(cmd: list[str], timeout: int = NAVIGATOR_COMMAND_TIMEOUT_S) -> tuple[str, str, int]:
    """Run a command and return (stdout, stderr, returncode).

    Launch failures map to the shell's codes: 127 not found, 126 not runnable.
    """
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return result.stdout.strip(), result.stderr.strip(), result.returncode
    except FileNotFoundError as exc:
        return "", str(exc), 127
    except OSError as exc:
        return "", str(exc), 126
    except subprocess.TimeoutExpired:
        return "", "Command timed out", 1


class DesktopNavigator:
    """Navigator for macOS (osascript/open) and Linux (wmctrl/gtk-launch)."""

    def __init__(self, fallback_url: str = CALENDAR_FALLBACK_URL, system: str | None = None):
        self.fallback_url = fallback_url
        self.system = system or platform.system()

    def go_home(self) -> None:
        if self.system == "Darwin":
            cmd = ["osascript", "-e", _MACOS_SHOW_DESKTOP]
        elif self.system == "Linux":
            cmd = ["wmctrl", "-k", "on"]
        else:
            raise NavigatorActionFailed(f"go_home is not supported on {self.system}")

        _, stderr, rc = _run(cmd)
        if rc != 0:
            raise NavigatorActionFailed(f"go_home failed (rc={rc}): {stderr}")
        logger.debug("Going home")

    def _launch_command(self, app_id: str) -> list[str]:
        if self.system == "Darwin":
            return ["open", "-b", app_id]
        return ["gtk-launch", app_id]

    def launch_application(self, candidates: list[str]) -> bool:
        """Try each candidate in order; fall back to the calendar web view."""
        for app_id in candidates:
            _, stderr, rc = _run(self._launch_command(app_id))
            if rc == 0:
                logger.info(f"Opening calendar: {app_id}")
                return True
            logger.debug(f"Could not launch {app_id}: {stderr}")

        logger.warning("No calendar app found, trying calendar web view")
        try:
            opened = webbrowser.open(self.fallback_url)
        except webbrowser.Error as e:
            logger.error(f"Failed to open calendar: {e}")
            return False

        if opened:
            logger.info(f"Opened calendar via {self.fallback_url}")
        return opened


class NullNavigator:
    """Navigator for headless hosts: every action is a no-op."""

    def go_home(self) -> None:
        logger.debug("Navigation disabled, skipping go_home")

    def launch_application(self, candidates: list[str]) -> bool:
        logger.debug("Navigation disabled, skipping launch")
        return False
