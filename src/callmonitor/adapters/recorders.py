"""Event recorder adapters."""

import logging
import threading

from callmonitor.core.models import AuditEvent, CounterEvent, Event, TimerEvent
from callmonitor.core.ports import EventRecorderPort

logger = logging.getLogger(__name__)


class InMemoryEventRecorder:
    """In-memory implementation of EventRecorderPort.

    Keeps recorded events in a list guarded by a lock. Suitable for testing
    and low-volume applications where events are inspected in-process.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[Event] = []

    def record(self, event: Event) -> None:
        """Append an event to the buffer."""
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[Event]:
        """Snapshot of every recorded event, in recording order."""
        with self._lock:
            return list(self._events)

    def counters(self) -> list[CounterEvent]:
        return [e for e in self.events if isinstance(e, CounterEvent)]

    def timers(self) -> list[TimerEvent]:
        return [e for e in self.events if isinstance(e, TimerEvent)]

    def audits(self) -> list[AuditEvent]:
        return [e for e in self.events if isinstance(e, AuditEvent)]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


class FanOutEventRecorder:
    """Dispatches each event to several recorders in order.

    A recorder that raises is logged and skipped; the remaining recorders
    still receive the event.

    Example:
        ```python
        recorder = FanOutEventRecorder(LoggingEventRecorder(), metrics_recorder)
        monitor = CallMonitor(recorder)
        ```
    """

    def __init__(self, *recorders: EventRecorderPort) -> None:
        self._recorders = recorders

    @property
    def recorders(self) -> tuple[EventRecorderPort, ...]:
        return self._recorders

    def record(self, event: Event) -> None:
        for recorder in self._recorders:
            try:
                recorder.record(event)
            except Exception:
                logger.exception(
                    "Recorder %s failed for %s",
                    type(recorder).__name__,
                    type(event).__name__,
                )
