"""Port interfaces for the monitor's collaborators.

These protocols define the contracts that recorders and clocks must implement.
The core depends only on these interfaces, not concrete implementations.
"""

from typing import Protocol, runtime_checkable

from callmonitor.core.models import Event


@runtime_checkable
class EventRecorderPort(Protocol):
    """Port for recording monitor events.

    Implementations must be safe to call from several threads at once and
    should not block. Examples: InMemoryEventRecorder, LoggingEventRecorder.
    """

    def record(self, event: Event) -> None:
        """Record a counter, timer or audit event."""
        ...


@runtime_checkable
class ClockPort(Protocol):
    """Port for reading the current instant."""

    def now(self) -> float:
        """Return the current instant in seconds."""
        ...
