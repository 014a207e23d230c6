"""ASGI helpers for building request contexts."""

from typing import Any

from callmonitor.core.context import RequestContext

# ASGI type aliases
Scope = dict[str, Any]


def _decode_headers(scope: Scope) -> dict[str, str]:
    """Decode raw ASGI headers, keeping the first value of each name."""
    headers: dict[str, str] = {}
    seen: set[str] = set()
    raw: list[tuple[bytes, bytes]] = scope.get("headers", [])
    for name, value in raw:
        key = name.decode("latin-1")
        if key.lower() in seen:
            continue
        seen.add(key.lower())
        headers[key] = value.decode("latin-1")
    return headers


def _request_uri(scope: Scope) -> str:
    path = scope.get("path", "")
    query_string = scope.get("query_string", b"").decode("latin-1")
    if query_string:
        return f"{path}?{query_string}"
    return path


def context_from_scope(scope: Scope) -> RequestContext:
    """Build a RequestContext from an ASGI HTTP scope.

    Args:
        scope: ASGI scope dictionary containing request metadata.

    Returns:
        RequestContext with the request headers and path plus query string.
    """
    return RequestContext(headers=_decode_headers(scope), uri=_request_uri(scope))
