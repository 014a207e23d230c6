"""Outcome classification for monitored calls."""

from dataclasses import dataclass

from callmonitor.core.errors import (
    BadGatewayError,
    GatewayTimeoutError,
    HttpError,
    ServiceUnavailableError,
    UpstreamErrorResponse,
)
from callmonitor.core.models import Failure, Outcome, Success

SUCCESS_STATUS = "success"

# Latency of these failures says nothing about the dependency's work.
UNTIMED_ERRORS: tuple[type[BaseException], ...] = (
    BadGatewayError,
    GatewayTimeoutError,
    ServiceUnavailableError,
)


@dataclass(frozen=True)
class Classification:
    """Status label and timing decision for a settled call."""

    status: str
    should_time: bool


def error_status(error: BaseException) -> str:
    """Derive the metric status label for an error.

    Explicit response codes win over report-as codes, which win over the
    error's class name.
    """
    if isinstance(error, HttpError):
        return str(error.response_code)
    if isinstance(error, UpstreamErrorResponse):
        return str(error.report_as)
    return type(error).__name__


def should_time(error: BaseException) -> bool:
    """Return False for connection, gateway and availability failures."""
    return not isinstance(error, UNTIMED_ERRORS)


def classify_error(error: BaseException) -> Classification:
    return Classification(status=error_status(error), should_time=should_time(error))


def classify(outcome: Outcome) -> Classification:
    """Classify a settled outcome.

    Args:
        outcome: Success or Failure of the monitored operation.

    Returns:
        Classification with status "success" and timing enabled on success,
        or the error-derived values on failure.
    """
    if isinstance(outcome, Success):
        return Classification(status=SUCCESS_STATUS, should_time=True)
    if isinstance(outcome, Failure):
        return classify_error(outcome.error)
    raise TypeError(f"Unsupported outcome: {outcome!r}")
