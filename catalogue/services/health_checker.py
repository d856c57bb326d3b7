# catalogue/services/health_checker.py

"""Catalogue endpoint health checker."""

import asyncio
import logging
import time
from dataclasses import dataclass

from catalogue.client.transport import CatalogueTransport
from catalogue.config.settings import Settings

logger = logging.getLogger("catalogue.health")


@dataclass
class HealthResult:
    """Result of a single endpoint probe."""

    endpoint: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_endpoint(
    transport: CatalogueTransport,
    endpoint: str,
    path: str,
    params: dict[str, str] | None = None,
) -> HealthResult:
    """GET one endpoint and grade the response."""
    start = time.monotonic()
    try:
        resp = transport.get(path, params)
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            endpoint=endpoint,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )
    elapsed_ms = (time.monotonic() - start) * 1000

    if not 200 <= resp.status_code < 300:
        return HealthResult(
            endpoint=endpoint,
            status="down",
            latency_ms=elapsed_ms,
            message=f"HTTP {resp.status_code}",
        )
    if not (resp.text or "").strip():
        return HealthResult(
            endpoint=endpoint,
            status="down",
            latency_ms=elapsed_ms,
            message="Empty body",
        )
    if elapsed_ms > Settings.HEALTH_SLOW_MS:
        return HealthResult(
            endpoint=endpoint,
            status="slow",
            latency_ms=elapsed_ms,
            message="High latency",
        )
    return HealthResult(
        endpoint=endpoint,
        status="ok",
        latency_ms=elapsed_ms,
        message="",
    )


class HealthChecker:
    """Probes the list and detail endpoints concurrently."""

    def __init__(
        self,
        transport: CatalogueTransport | None = None,
        sample_product_id: str = "1",
    ) -> None:
        self.transport = transport or CatalogueTransport()
        self.sample_product_id = sample_product_id

    async def check_all(self) -> list[HealthResult]:
        """Probe every endpoint and log each result."""
        tasks = [
            asyncio.to_thread(
                probe_endpoint,
                self.transport,
                "list",
                Settings.LIST_PATH,
            ),
            asyncio.to_thread(
                probe_endpoint,
                self.transport,
                "detail",
                Settings.DETAIL_PATH,
                {Settings.DETAIL_ID_PARAM: self.sample_product_id},
            ),
        ]
        results: list[HealthResult] = list(await asyncio.gather(*tasks))
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.endpoint,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
