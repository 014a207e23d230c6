"""httpx integration that raises the upstream error taxonomy.

Responses and transport failures are mapped onto the errors the classifier
understands, so monitored HTTP calls are labelled by status code.
"""

import httpx

from callmonitor.core.errors import (
    BadGatewayError,
    BadRequestError,
    GatewayTimeoutError,
    NotFoundError,
    Upstream4xxResponse,
    Upstream5xxResponse,
)

# Codes upstream failures are reported as
CLIENT_ERROR_REPORT_AS = 500
SERVER_ERROR_REPORT_AS = 502


def _describe(response: httpx.Response) -> str:
    request = response.request
    return (
        f"{request.method} of '{request.url}' returned {response.status_code}. "
        f"Response body: '{response.text}'"
    )


def check_response(response: httpx.Response) -> httpx.Response:
    """Return a 2xx/3xx response unchanged, raise for 4xx and 5xx.

    Raises:
        BadRequestError: On 400.
        NotFoundError: On 404.
        Upstream4xxResponse: On any other 4xx, reported as 500.
        Upstream5xxResponse: On 5xx, reported as 502.
    """
    status = response.status_code
    if status < 400:
        return response
    message = _describe(response)
    if status == 400:
        raise BadRequestError(message)
    if status == 404:
        raise NotFoundError(message)
    if status < 500:
        raise Upstream4xxResponse(message, status, CLIENT_ERROR_REPORT_AS)
    raise Upstream5xxResponse(message, status, SERVER_ERROR_REPORT_AS)


def translate_transport_error(error: Exception) -> Exception:
    """Map httpx transport failures onto gateway errors.

    Timeouts become GatewayTimeoutError and connection failures become
    BadGatewayError. Any other error is returned unchanged.
    """
    if isinstance(error, httpx.TimeoutException):
        return GatewayTimeoutError(f"Upstream timed out: {error}")
    if isinstance(error, httpx.ConnectError):
        return BadGatewayError(f"Upstream unreachable: {error}")
    return error


async def send_checked(
    client: httpx.AsyncClient, request: httpx.Request
) -> httpx.Response:
    """Send a request and raise the upstream error taxonomy on failure."""
    try:
        response = await client.send(request)
    except httpx.TransportError as e:
        translated = translate_transport_error(e)
        if translated is e:
            raise
        raise translated from e
    return check_response(response)
