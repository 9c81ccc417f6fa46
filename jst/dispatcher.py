"""Dispatcher: fan out one probe per endpoint and join the outcomes."""

import asyncio
import logging
import time
from datetime import UTC, datetime

import httpx

from jst.endpoints import get_endpoints
from jst.models import Endpoint, ProbeOutcome, SpeedTestRun
from jst.probe import DEFAULT_TIMEOUT, probe_endpoint

logger = logging.getLogger(__name__)


async def dispatch(
    endpoints: list[Endpoint],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[list[ProbeOutcome], list[str]]:
    """Probe every endpoint concurrently and wait for all of them.

    One task is started per endpoint, with no cap on parallelism.  A task
    that raises is logged and left out of the outcomes instead of failing
    the batch.

    Args:
        endpoints: Endpoints to probe.
        timeout: Per-request timeout in seconds.
        transport: Optional ``httpx`` transport shared by all probes.

    Returns:
        ``(outcomes, dropped)`` where *dropped* lists the names of endpoints
        whose task did not complete.
    """
    tasks = [
        asyncio.create_task(
            probe_endpoint(endpoint, timeout=timeout, transport=transport),
            name=f"probe:{endpoint.url}",
        )
        for endpoint in endpoints
    ]
    settled = await asyncio.gather(*tasks, return_exceptions=True)

    outcomes: list[ProbeOutcome] = []
    dropped: list[str] = []
    for endpoint, result in zip(endpoints, settled):
        if isinstance(result, BaseException):
            logger.error("Task for %s failed: %r", endpoint.name, result)
            dropped.append(endpoint.name)
            continue
        outcomes.append(result)

    return outcomes, dropped


def run_speedtest(
    network: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SpeedTestRun:
    """Run the full measurement for one network profile.

    Args:
        network: Profile name (``"mainnet"`` or ``"testnet"``).
        timeout: Per-request timeout in seconds.
        transport: Optional ``httpx`` transport (used by tests).

    Returns:
        A ``SpeedTestRun`` with the collected outcomes.

    Raises:
        ValueError: If *network* is not a known profile.
    """
    endpoints = get_endpoints(network)
    logger.debug("Probing %d %s endpoint(s)", len(endpoints), network)

    started_at = datetime.now(UTC)
    t0 = time.monotonic()
    outcomes, dropped = asyncio.run(
        dispatch(endpoints, timeout=timeout, transport=transport)
    )
    duration = time.monotonic() - t0

    return SpeedTestRun(
        network=network,
        outcomes=outcomes,
        dropped=dropped,
        started_at=started_at,
        duration_seconds=duration,
    )
