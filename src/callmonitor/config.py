"""Settings shared by every monitor in a process."""

import os
from dataclasses import dataclass

DEFAULT_APP_NAME = "unknown-app"
DEFAULT_USER_AGENT_HEADER = "User-Agent"


@dataclass(frozen=True)
class MonitorSettings:
    """Process-wide monitor settings.

    Attributes:
        app_name: Application identity used as the source of every event.
        user_agent_header: Outbound header read for the user agent label.
    """

    app_name: str = DEFAULT_APP_NAME
    user_agent_header: str = DEFAULT_USER_AGENT_HEADER

    @classmethod
    def from_env(cls) -> "MonitorSettings":
        """Resolve settings from the environment.

        Reads ``CALLMONITOR_APP_NAME`` (falling back to ``APP_NAME``) and
        ``CALLMONITOR_USER_AGENT_HEADER``. Blank values use the defaults.
        """
        app_name = (
            os.getenv("CALLMONITOR_APP_NAME") or os.getenv("APP_NAME") or ""
        ).strip()
        header = (os.getenv("CALLMONITOR_USER_AGENT_HEADER") or "").strip()
        return cls(
            app_name=app_name or DEFAULT_APP_NAME,
            user_agent_header=header or DEFAULT_USER_AGENT_HEADER,
        )
