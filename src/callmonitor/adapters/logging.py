"""Python logging adapter for monitor events.

Writes every event as a structured stdlib log record so existing logging
handlers and formatters can pick events up through ``extra`` attributes.
"""

import logging

from callmonitor.core.models import AuditEvent, CounterEvent, Event, TimerEvent

DEFAULT_LOGGER_NAME = "callmonitor.events"


def _event_attributes(event: Event) -> dict[str, str | float]:
    """Map an event to the extra attributes attached to its log record."""
    if isinstance(event, CounterEvent):
        return {"event_type": "counter", "source": event.source, "metric": event.name}
    if isinstance(event, TimerEvent):
        return {
            "event_type": "timer",
            "source": event.source,
            "metric": event.name,
            "duration_seconds": event.duration,
        }
    if isinstance(event, AuditEvent):
        # Audit data may hold personal data; only its keys are logged.
        return {
            "event_type": "audit",
            "source": event.source,
            "audit_name": event.name,
            "audit_keys": ",".join(sorted(event.data)),
        }
    raise TypeError(f"Unsupported event: {event!r}")


class LoggingEventRecorder:
    """EventRecorderPort that logs events through the logging module.

    Example:
        ```python
        logging.basicConfig(level=logging.INFO)
        monitor = CallMonitor(LoggingEventRecorder())
        ```
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        level: int = logging.INFO,
    ) -> None:
        """Initialize the recorder.

        Args:
            logger: Logger to write to (default: "callmonitor.events").
            level: Level used for every event record (default: INFO).
        """
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self._level = level

    def record(self, event: Event) -> None:
        """Log one event with its attributes as extra fields."""
        attributes = _event_attributes(event)
        if isinstance(event, AuditEvent):
            message = f"audit {event.name}"
        else:
            message = f"{attributes['event_type']} {event.name}"
        self._logger.log(self._level, message, extra=attributes)
