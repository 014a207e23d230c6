"""Instrumentation for calls to third-party services.

Wraps pending calls to count outcomes, time them and emit audit events.
"""

from callmonitor.adapters.logging import LoggingEventRecorder
from callmonitor.adapters.recorders import FanOutEventRecorder, InMemoryEventRecorder
from callmonitor.config import MonitorSettings
from callmonitor.core.audit import NO_AUDIT, AuditStrategy, FunctionAuditStrategy
from callmonitor.core.classifier import Classification, classify, classify_error
from callmonitor.core.clock import SystemClock
from callmonitor.core.context import RequestContext
from callmonitor.core.errors import (
    BadGatewayError,
    BadRequestError,
    GatewayTimeoutError,
    HttpError,
    NotFoundError,
    ServiceUnavailableError,
    Upstream4xxResponse,
    Upstream5xxResponse,
    UpstreamErrorResponse,
)
from callmonitor.core.models import (
    AuditEvent,
    CounterEvent,
    Event,
    Failure,
    Success,
    TimerEvent,
)
from callmonitor.core.monitor import CallMonitor
from callmonitor.core.ports import ClockPort, EventRecorderPort

__all__ = [
    # Monitor
    "CallMonitor",
    "MonitorSettings",
    "RequestContext",
    "SystemClock",
    # Events
    "AuditEvent",
    "CounterEvent",
    "Event",
    "TimerEvent",
    # Outcomes
    "Classification",
    "Failure",
    "Success",
    "classify",
    "classify_error",
    # Audit
    "NO_AUDIT",
    "AuditStrategy",
    "FunctionAuditStrategy",
    # Errors
    "BadGatewayError",
    "BadRequestError",
    "GatewayTimeoutError",
    "HttpError",
    "NotFoundError",
    "ServiceUnavailableError",
    "Upstream4xxResponse",
    "Upstream5xxResponse",
    "UpstreamErrorResponse",
    # Ports
    "ClockPort",
    "EventRecorderPort",
    # Recorders
    "FanOutEventRecorder",
    "InMemoryEventRecorder",
    "LoggingEventRecorder",
]
