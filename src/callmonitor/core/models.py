"""Core domain models for monitored call events."""

import re
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CounterEvent:
    """A single increment of an outcome counter.

    Attributes:
        source: Name of the application emitting the event.
        name: Dot-joined metric name ending in ``.count``.
    """

    source: str
    name: str


@dataclass(frozen=True)
class TimerEvent:
    """A latency measurement for one settled call.

    Attributes:
        source: Name of the application emitting the event.
        name: Dot-joined metric name ending in ``.time``.
        duration: Elapsed time in seconds.
    """

    source: str
    name: str
    duration: float


@dataclass(frozen=True)
class AuditEvent:
    """An audit trail entry for one settled call.

    Attributes:
        source: Name of the application emitting the event.
        name: Component name the audit belongs to.
        tags: Request-derived tags merged with strategy tags.
        data: Business data supplied by the audit strategy.
    """

    source: str
    name: str
    tags: dict[str, str] = field(default_factory=dict)
    data: dict[str, str] = field(default_factory=dict)


Event = CounterEvent | TimerEvent | AuditEvent


@dataclass(frozen=True)
class Success(Generic[T]):
    """Settled outcome carrying the operation's value."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Settled outcome carrying the operation's error."""

    error: BaseException


Outcome = Success[Any] | Failure

# Dots and non-ASCII characters inside a name segment
_UNSAFE_SEGMENT_CHARS = re.compile(r"[^\x00-\x7f]|\.")


def metric_segment(part: str) -> str:
    """Make one metric name segment ASCII and dot-free, preserving case."""
    return _UNSAFE_SEGMENT_CHARS.sub("_", part)


def metric_name(
    component_name: str,
    target_service_name: str,
    user_agent: str,
    status: str,
    suffix: str,
) -> str:
    """Build a dot-joined metric name.

    Args:
        component_name: Calling component (e.g., "payments").
        target_service_name: Called service (e.g., "ledger").
        user_agent: Outbound user agent, "undefined" when unknown.
        status: Outcome status label.
        suffix: "count" or "time".

    Returns:
        Name of the form ``component.target.user_agent.status.suffix``.
        Dots and non-ASCII characters inside a part become underscores, so
        the name is ASCII and always has five segments.
    """
    parts = (component_name, target_service_name, user_agent, status, suffix)
    return ".".join(metric_segment(part) for part in parts)
