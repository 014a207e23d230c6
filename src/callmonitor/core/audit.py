"""Audit strategies decide what, if anything, a monitored call audits."""

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class AuditStrategy(Generic[T]):
    """Per-result-type audit policy.

    Every method returns an empty mapping by default. Return non-empty data
    from ``data_on_success`` or ``data_on_failure`` to trigger an audit; the
    matching tag method adds tags on top of the request-derived ones.

    Example:
        ```python
        class PaymentAudit(AuditStrategy[Receipt]):
            def data_on_success(self, value: Receipt) -> dict[str, str]:
                return {"receiptId": value.id}
        ```
    """

    def data_on_success(self, value: T) -> Mapping[str, str]:
        return {}

    def tags_on_success(self, value: T) -> Mapping[str, str]:
        return {}

    def data_on_failure(self, error: BaseException) -> Mapping[str, str]:
        return {}

    def tags_on_failure(self, error: BaseException) -> Mapping[str, str]:
        return {}


NO_AUDIT: AuditStrategy[Any] = AuditStrategy()


class FunctionAuditStrategy(AuditStrategy[T]):
    """Audit strategy assembled from plain functions.

    Any function left as None behaves like the empty default.
    """

    def __init__(
        self,
        data_on_success: Callable[[T], Mapping[str, str]] | None = None,
        tags_on_success: Callable[[T], Mapping[str, str]] | None = None,
        data_on_failure: Callable[[BaseException], Mapping[str, str]] | None = None,
        tags_on_failure: Callable[[BaseException], Mapping[str, str]] | None = None,
    ) -> None:
        self._data_on_success = data_on_success
        self._tags_on_success = tags_on_success
        self._data_on_failure = data_on_failure
        self._tags_on_failure = tags_on_failure

    def data_on_success(self, value: T) -> Mapping[str, str]:
        if self._data_on_success is None:
            return {}
        return self._data_on_success(value)

    def tags_on_success(self, value: T) -> Mapping[str, str]:
        if self._tags_on_success is None:
            return {}
        return self._tags_on_success(value)

    def data_on_failure(self, error: BaseException) -> Mapping[str, str]:
        if self._data_on_failure is None:
            return {}
        return self._data_on_failure(error)

    def tags_on_failure(self, error: BaseException) -> Mapping[str, str]:
        if self._tags_on_failure is None:
            return {}
        return self._tags_on_failure(error)
