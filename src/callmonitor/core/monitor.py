"""Call monitor that times, counts and audits calls to other services.

The monitor attaches a completion callback to a pending operation and hands
the same operation back, so callers see exactly the value or error they
would have seen without it.
"""

import asyncio
import concurrent.futures
import functools
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, TypeVar

from callmonitor.config import MonitorSettings
from callmonitor.core.audit import NO_AUDIT, AuditStrategy
from callmonitor.core.classifier import classify
from callmonitor.core.clock import SystemClock
from callmonitor.core.context import RequestContext
from callmonitor.core.models import (
    AuditEvent,
    CounterEvent,
    Event,
    Failure,
    Outcome,
    Success,
    TimerEvent,
    metric_name,
)
from callmonitor.core.ports import ClockPort, EventRecorderPort

logger = logging.getLogger(__name__)

T = TypeVar("T")

Pending = Awaitable[T] | concurrent.futures.Future[T]
Settled = asyncio.Future[T] | concurrent.futures.Future[T]
AnyFuture = asyncio.Future[Any] | concurrent.futures.Future[Any]


def _require_name(kind: str, value: str) -> None:
    if not value:
        raise ValueError(f"{kind} must be a non-empty string")


def _outcome_of(future: AnyFuture) -> Outcome:
    """Read the outcome of a settled future without re-raising it."""
    try:
        error = future.exception()
    except (asyncio.CancelledError, concurrent.futures.CancelledError) as cancelled:
        error = cancelled
    if error is not None:
        return Failure(error)
    return Success(future.result())


class _MonitoredCall:
    """One in-flight call: Pending until its future settles, then terminal."""

    def __init__(
        self,
        monitor: "CallMonitor",
        component_name: str,
        target_service_name: str,
        context: RequestContext,
        audit: AuditStrategy[Any],
    ) -> None:
        self._monitor = monitor
        self.component_name = component_name
        self.target_service_name = target_service_name
        self.context = context
        self.audit = audit
        self.user_agent = context.user_agent(monitor.settings.user_agent_header)
        self.started = monitor.clock.now()

    def settle(self, future: AnyFuture) -> None:
        """Emit counter, timer and audit events for the settled future."""
        ended = self._monitor.clock.now()
        outcome = _outcome_of(future)
        classification = classify(outcome)
        logger.debug(
            "Call %s.%s settled with status %s",
            self.component_name,
            self.target_service_name,
            classification.status,
        )

        self._emit(
            CounterEvent(
                source=self._monitor.source,
                name=self._name(classification.status, "count"),
            )
        )
        if classification.should_time:
            self._emit(
                TimerEvent(
                    source=self._monitor.source,
                    name=self._name(classification.status, "time"),
                    duration=ended - self.started,
                )
            )
        self._emit_audit(outcome)

    def _name(self, status: str, suffix: str) -> str:
        return metric_name(
            self.component_name,
            self.target_service_name,
            self.user_agent,
            status,
            suffix,
        )

    def _emit(self, event: Event) -> None:
        try:
            self._monitor.recorder.record(event)
        except Exception:
            logger.exception("Failed to record %s", type(event).__name__)

    def _emit_audit(self, outcome: Outcome) -> None:
        try:
            if isinstance(outcome, Success):
                data = self.audit.data_on_success(outcome.value)
                extra_tags = self.audit.tags_on_success(outcome.value)
            else:
                data = self.audit.data_on_failure(outcome.error)
                extra_tags = self.audit.tags_on_failure(outcome.error)
            if not data:
                return
            tags = self.context.audit_tags(self.target_service_name, self.context.uri)
            tags.update(extra_tags)
            event = AuditEvent(
                source=self._monitor.source,
                name=self.component_name,
                tags=tags,
                data=dict(data),
            )
        except Exception:
            logger.exception(
                "Audit strategy failed for %s.%s",
                self.component_name,
                self.target_service_name,
            )
            return
        self._emit(event)


class CallMonitor:
    """Observes calls to third-party services.

    Example:
        ```python
        monitor = CallMonitor(InMemoryEventRecorder(), source="payments-api")
        context = RequestContext(headers={"User-Agent": "checkout"}, uri="/pay")

        receipt = await monitor.monitor("payments", "ledger", context)(
            ledger.post(entry)
        )
        ```
    """

    def __init__(
        self,
        recorder: EventRecorderPort,
        clock: ClockPort | None = None,
        source: str | None = None,
        settings: MonitorSettings | None = None,
    ) -> None:
        """Initialize the monitor with its collaborators.

        Args:
            recorder: Receives every counter, timer and audit event.
            clock: Source of instants for timing (default: SystemClock).
            source: Application identity stamped on every event. Defaults to
                settings.app_name.
            settings: Process-wide settings (default: MonitorSettings()).
        """
        self.settings = settings or MonitorSettings()
        self.recorder = recorder
        self.clock = clock or SystemClock()
        self.source = source or self.settings.app_name

    def monitor(
        self,
        component_name: str,
        target_service_name: str,
        context: RequestContext,
        audit: AuditStrategy[T] = NO_AUDIT,
    ) -> Callable[[Pending[T]], Settled[T]]:
        """Build a wrapper that monitors one pending operation.

        Args:
            component_name: Calling component, first part of metric names.
            target_service_name: Called service, second part of metric names.
            context: Outbound headers and URI of the current request.
            audit: Decides what to audit on success and failure.

        Returns:
            Callable taking an awaitable or concurrent.futures.Future and
            returning a future that settles with the same value or error.

        Raises:
            ValueError: If either name is empty.
        """
        _require_name("component_name", component_name)
        _require_name("target_service_name", target_service_name)

        def wrap(operation: Pending[T]) -> Settled[T]:
            call = _MonitoredCall(
                self, component_name, target_service_name, context, audit
            )
            future: Settled[T]
            if isinstance(operation, concurrent.futures.Future):
                future = operation
            else:
                future = asyncio.ensure_future(operation)
            future.add_done_callback(call.settle)
            return future

        return wrap

    def monitored(
        self,
        component_name: str,
        target_service_name: str,
        audit: AuditStrategy[T] = NO_AUDIT,
    ) -> Callable[
        [Callable[..., Coroutine[Any, Any, T]]],
        Callable[..., Coroutine[Any, Any, T]],
    ]:
        """Decorate an async function so every call to it is monitored.

        The decorated function must accept the request context as the
        keyword argument ``context``.
        """
        _require_name("component_name", component_name)
        _require_name("target_service_name", target_service_name)

        def decorator(
            func: Callable[..., Coroutine[Any, Any, T]],
        ) -> Callable[..., Coroutine[Any, Any, T]]:
            @functools.wraps(func)
            async def wrapper(*args: Any, context: RequestContext, **kwargs: Any) -> T:
                wrap = self.monitor(component_name, target_service_name, context, audit)
                return await wrap(func(*args, context=context, **kwargs))

            return wrapper

        return decorator
