"""Shared test fixtures for all test modules."""

import pytest

from callmonitor.adapters.recorders import InMemoryEventRecorder
from callmonitor.core.context import RequestContext
from callmonitor.core.monitor import CallMonitor
from tests.helpers import FakeClock


@pytest.fixture
def recorder() -> InMemoryEventRecorder:
    """Provide an empty in-memory recorder."""
    return InMemoryEventRecorder()


@pytest.fixture
def clock() -> FakeClock:
    """Provide a clock that starts at 10.0s and settles at 10.25s."""
    return FakeClock([10.0, 10.25])


@pytest.fixture
def context() -> RequestContext:
    """Provide a request context with a user agent and request id."""
    return RequestContext(
        headers={"User-Agent": "checkout", "X-Request-ID": "req-1"},
        uri="/payments/42",
    )


@pytest.fixture
def monitor(recorder: InMemoryEventRecorder, clock: FakeClock) -> CallMonitor:
    """Provide a monitor wired to the in-memory recorder and fake clock."""
    return CallMonitor(recorder, clock=clock, source="payments-api")
