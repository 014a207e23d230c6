"""Upstream error taxonomy used to label failed calls.

``HttpError`` carries the response code observed from a dependency.
``UpstreamErrorResponse`` carries the raw upstream code plus the code the
failure should be reported as. Anything else is a generic error.
"""


class HttpError(Exception):
    """A failed call that carries an explicit HTTP response code."""

    def __init__(self, message: str, response_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.response_code = response_code


class BadRequestError(HttpError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class NotFoundError(HttpError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class BadGatewayError(HttpError):
    """The dependency could not be reached."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 502)


class ServiceUnavailableError(HttpError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class GatewayTimeoutError(HttpError):
    """The dependency did not answer in time."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 504)


class UpstreamErrorResponse(Exception):
    """A non-2xx upstream response with a code to report it as.

    Attributes:
        message: Human readable description.
        upstream_response_code: Status code the dependency returned.
        report_as: Status code used for metrics and onward responses.
    """

    def __init__(
        self, message: str, upstream_response_code: int, report_as: int
    ) -> None:
        super().__init__(message)
        self.message = message
        self.upstream_response_code = upstream_response_code
        self.report_as = report_as


class Upstream4xxResponse(UpstreamErrorResponse):
    """Client error returned by a dependency."""


class Upstream5xxResponse(UpstreamErrorResponse):
    """Server error returned by a dependency."""
