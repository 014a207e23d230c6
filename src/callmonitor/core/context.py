"""Per-request context passed explicitly into every monitored call."""

from collections.abc import Mapping
from dataclasses import dataclass, field

UNDEFINED_USER_AGENT = "undefined"
MISSING_TAG = "-"

# Outbound header -> audit tag name
_AUDIT_HEADER_TAGS = {
    "X-Request-ID": "X-Request-ID",
    "X-Session-ID": "X-Session-ID",
    "True-Client-IP": "clientIP",
    "True-Client-Port": "clientPort",
    "Akamai-Reputation": "Akamai-Reputation",
    "deviceID": "deviceID",
}


@dataclass(frozen=True)
class RequestContext:
    """Outbound headers and URI of the request a call is made on behalf of.

    Attributes:
        headers: Outbound headers. Lookups are case-insensitive.
        uri: URI of the current inbound request.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    uri: str = ""

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first header matching name, ignoring case."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    def user_agent(self, header_name: str = "User-Agent") -> str:
        """Return the outbound user agent, or "undefined" when absent."""
        return self.header(header_name) or UNDEFINED_USER_AGENT

    def audit_tags(self, transaction_name: str, path: str) -> dict[str, str]:
        """Build the baseline audit tags for a call.

        Args:
            transaction_name: Usually the target service name.
            path: Usually the inbound request URI.

        Returns:
            Request and session identifiers, client details, transaction name
            and path. Missing headers are tagged "-".
        """
        tags = {
            tag: self.header(header) or MISSING_TAG
            for header, tag in _AUDIT_HEADER_TAGS.items()
        }
        tags["transactionName"] = transaction_name
        tags["path"] = path
        return tags
