"""Example ASGI application that monitors its calls to a ledger service.

Run with:
    LEDGER_URL=http://localhost:9000 CALLMONITOR_APP_NAME=payments-api \
        uvicorn examples.asgi_example:app

Endpoints:
    /payments/<id>   - Fetches the ledger entry for a payment

Every ledger call emits, through the stdlib logging module:
    payments.ledger.<user agent>.<status>.count   (always)
    payments.ledger.<user agent>.<status>.time    (unless the ledger is unreachable)
    an audit event with the entry id              (on success)
"""

import json
import logging
import os
from typing import Any

import httpx

from callmonitor import CallMonitor, FunctionAuditStrategy, MonitorSettings
from callmonitor.adapters.frameworks.asgi import context_from_scope
from callmonitor.adapters.http_client import send_checked
from callmonitor.adapters.logging import LoggingEventRecorder

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")

LEDGER_URL = os.getenv("LEDGER_URL", "http://localhost:9000")

monitor = CallMonitor(LoggingEventRecorder(), settings=MonitorSettings.from_env())
ledger_client = httpx.AsyncClient(base_url=LEDGER_URL, timeout=2.0)

entry_audit: FunctionAuditStrategy[httpx.Response] = FunctionAuditStrategy(
    data_on_success=lambda response: {"entryId": str(response.json().get("id", ""))},
    data_on_failure=lambda error: {"failure": type(error).__name__},
)


async def _send_json(send: Any, status: int, body: dict[str, Any]) -> None:
    headers = [(b"content-type", b"application/json")]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": json.dumps(body).encode()})


async def app(scope: dict[str, Any], receive: Any, send: Any) -> None:
    if scope["type"] != "http":
        return

    path: str = scope["path"]
    if not path.startswith("/payments/"):
        await _send_json(send, 404, {"error": "Not Found"})
        return

    payment_id = path.removeprefix("/payments/")
    context = context_from_scope(scope)
    request = ledger_client.build_request(
        "GET",
        f"/entries/{payment_id}",
        headers={"User-Agent": context.user_agent()},
    )
    try:
        response = await monitor.monitor("payments", "ledger", context, entry_audit)(
            send_checked(ledger_client, request)
        )
    except Exception as e:
        await _send_json(send, 502, {"error": type(e).__name__})
        return
    await _send_json(send, 200, response.json())
