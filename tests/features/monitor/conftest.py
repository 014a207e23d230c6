"""BDD step definitions for monitored call features."""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from callmonitor.adapters.recorders import InMemoryEventRecorder
from callmonitor.core.audit import AuditStrategy, FunctionAuditStrategy, NO_AUDIT
from callmonitor.core.context import RequestContext
from callmonitor.core.errors import GatewayTimeoutError, HttpError
from callmonitor.core.models import AuditEvent, CounterEvent, TimerEvent
from callmonitor.core.monitor import CallMonitor
from tests.helpers import FakeClock


@dataclass
class MonitorScenarioContext:
    """State shared between the steps of one scenario."""

    recorder: InMemoryEventRecorder = field(default_factory=InMemoryEventRecorder)
    monitor: CallMonitor | None = None
    request: RequestContext = field(default_factory=RequestContext)
    audit: AuditStrategy[Any] = NO_AUDIT
    result: Any = None
    error: BaseException | None = None


@pytest.fixture
def ctx() -> MonitorScenarioContext:
    """Fresh scenario context for each test."""
    return MonitorScenarioContext()


def _call(ctx: MonitorScenarioContext, component: str, target: str, operation) -> None:
    assert ctx.monitor is not None

    async def run() -> Any:
        return await ctx.monitor.monitor(component, target, ctx.request, ctx.audit)(
            operation()
        )

    try:
        ctx.result = asyncio.run(run())
    except Exception as e:
        ctx.error = e


# === Background Steps ===
@given("an in-memory event recorder")
def step_recorder(ctx: MonitorScenarioContext) -> None:
    ctx.recorder = InMemoryEventRecorder()


@given(parsers.parse('a call monitor for application "{app}"'))
def step_monitor(ctx: MonitorScenarioContext, app: str) -> None:
    ctx.monitor = CallMonitor(ctx.recorder, clock=FakeClock([1.0, 1.5]), source=app)


@given(parsers.parse('a request from user agent "{user_agent}" to "{uri}"'))
def step_request(ctx: MonitorScenarioContext, user_agent: str, uri: str) -> None:
    ctx.request = RequestContext(headers={"User-Agent": user_agent}, uri=uri)


@given(parsers.parse('a request without a user agent to "{uri}"'))
def step_request_without_user_agent(ctx: MonitorScenarioContext, uri: str) -> None:
    ctx.request = RequestContext(uri=uri)


# === Audit Strategy Steps ===
@given("an audit strategy that returns no data on success")
def step_no_success_data(ctx: MonitorScenarioContext) -> None:
    ctx.audit = FunctionAuditStrategy(data_on_success=lambda value: {})


@given(parsers.parse('an audit strategy that returns failure data "{key}" = "{value}"'))
def step_failure_data(ctx: MonitorScenarioContext, key: str, value: str) -> None:
    ctx.audit = FunctionAuditStrategy(data_on_failure=lambda error: {key: value})


@given(
    parsers.parse(
        'an audit strategy that returns success data "{key}" = "{value}" '
        'and tag "{tag}" = "{tag_value}"'
    )
)
def step_success_data_and_tag(
    ctx: MonitorScenarioContext, key: str, value: str, tag: str, tag_value: str
) -> None:
    ctx.audit = FunctionAuditStrategy(
        data_on_success=lambda result: {key: value},
        tags_on_success=lambda result: {tag: tag_value},
    )


# === Call Steps ===
@when(parsers.parse('the "{component}" component calls "{target}" and it returns "{value}"'))
def step_call_returns(
    ctx: MonitorScenarioContext, component: str, target: str, value: str
) -> None:
    async def operation() -> str:
        return value

    _call(ctx, component, target, operation)


@when(
    parsers.parse(
        'the "{component}" component calls "{target}" and it fails with a gateway timeout'
    )
)
def step_call_times_out(ctx: MonitorScenarioContext, component: str, target: str) -> None:
    async def operation() -> str:
        raise GatewayTimeoutError("ledger did not answer")

    _call(ctx, component, target, operation)


@when(
    parsers.parse(
        'the "{component}" component calls "{target}" '
        "and it fails with response code {code:d}"
    )
)
def step_call_fails_with_code(
    ctx: MonitorScenarioContext, component: str, target: str, code: int
) -> None:
    async def operation() -> str:
        raise HttpError("ledger failed", code)

    _call(ctx, component, target, operation)


# === Outcome Steps ===
@then(parsers.parse('the caller receives "{value}"'))
def step_caller_receives(ctx: MonitorScenarioContext, value: str) -> None:
    assert ctx.error is None
    assert ctx.result == value


@then("the caller receives a gateway timeout error")
def step_caller_receives_timeout(ctx: MonitorScenarioContext) -> None:
    assert isinstance(ctx.error, GatewayTimeoutError)


# === Event Steps ===
@then(parsers.parse('a counter named "{name}" is recorded'))
def step_counter_recorded(ctx: MonitorScenarioContext, name: str) -> None:
    assert [c.name for c in ctx.recorder.counters()] == [name]
    assert ctx.recorder.counters()[0].source == "payments-api"


@then(parsers.parse('a timer named "{name}" is recorded'))
def step_timer_recorded(ctx: MonitorScenarioContext, name: str) -> None:
    [timer] = ctx.recorder.timers()
    assert timer.name == name
    assert timer.duration == 0.5


@then("no timer is recorded")
def step_no_timer(ctx: MonitorScenarioContext) -> None:
    assert ctx.recorder.timers() == []


@then("no audit event is recorded")
def step_no_audit(ctx: MonitorScenarioContext) -> None:
    assert ctx.recorder.audits() == []


@then(parsers.parse('an audit event is recorded with data "{key}" = "{value}"'))
def step_audit_recorded(ctx: MonitorScenarioContext, key: str, value: str) -> None:
    [audit] = ctx.recorder.audits()
    assert audit.data == {key: value}
    assert audit.name == "payments"


@then(parsers.parse('the audit event has tag "{tag}" = "{value}"'))
def step_audit_tag(ctx: MonitorScenarioContext, tag: str, value: str) -> None:
    [audit] = ctx.recorder.audits()
    assert audit.tags[tag] == value


@then("events are recorded in the order counter, timer, audit")
def step_event_order(ctx: MonitorScenarioContext) -> None:
    assert [type(e) for e in ctx.recorder.events] == [
        CounterEvent,
        TimerEvent,
        AuditEvent,
    ]
