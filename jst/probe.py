"""Probe: one timed ``getTipAccounts`` JSON-RPC call against one endpoint."""

import asyncio
import json
import logging
import time
from datetime import timedelta

import httpx

from jst.models import Endpoint, ProbeOutcome

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
RPC_METHOD = "getTipAccounts"
RPC_PATH = f"/api/v1/{RPC_METHOD}"

REQUEST_BODY = json.dumps(
    {"jsonrpc": "2.0", "id": 1, "method": RPC_METHOD, "params": []},
    separators=(",", ":"),
)
REQUEST_HEADERS = {"Content-Type": "application/json"}


def probe_url(endpoint: Endpoint) -> str:
    """Return the full request target for *endpoint*."""
    return f"{endpoint.url}{RPC_PATH}"


async def probe_endpoint(
    endpoint: Endpoint,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProbeOutcome:
    """Measure the round-trip time of one ``getTipAccounts`` call.

    The clock stops once the response headers arrive; only the HTTP
    status is inspected and the body is never read.  *timeout* bounds
    the whole request, not just each network operation.
    Transport failures (connect, DNS, TLS, timeout) and non-2xx statuses
    are returned as error outcomes, never raised.

    Args:
        endpoint: Endpoint to probe.
        timeout: Per-request timeout in seconds.
        transport: Optional ``httpx`` transport (used by tests).

    Returns:
        A ``ProbeOutcome`` carrying either the elapsed time or an error.
    """
    url = probe_url(endpoint)

    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        start = time.perf_counter()
        try:
            async with asyncio.timeout(timeout):
                async with client.stream(
                    "POST", url, content=REQUEST_BODY, headers=REQUEST_HEADERS
                ) as response:
                    elapsed = timedelta(seconds=time.perf_counter() - start)
        except TimeoutError:
            message = f"request timed out after {timeout:g}s"
            logger.debug("%s failed: %s", url, message)
            return ProbeOutcome.with_error(endpoint, message)
        except httpx.HTTPError as exc:
            message = str(exc) or type(exc).__name__
            logger.debug("%s failed: %s", url, message)
            return ProbeOutcome.with_error(endpoint, message)

    if response.is_success:
        logger.debug("%s answered in %s", url, elapsed)
        return ProbeOutcome.with_success(endpoint, elapsed)

    logger.debug("%s returned HTTP %d", url, response.status_code)
    return ProbeOutcome.with_error(endpoint, f"HTTP {response.status_code}")
