# snackbar/services/health_checker.py

"""Catalog connectivity health checker."""

import logging
import time
from dataclasses import dataclass
from urllib.parse import urlencode

from snackbar.clients.remote_fetcher import RemoteFetcher
from snackbar.config.settings import Settings

logger = logging.getLogger("snackbar.health")

_HEALTH_TIMEOUT_MS = 10000
_PROBE_TERM = "water"


@dataclass
class HealthResult:
    """Result of a catalog health probe."""

    source_id: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def _probe_url() -> str:
    params = {
        "search_terms": _PROBE_TERM,
        "action": "process",
        "search_simple": "1",
        "json": "1",
        "page_size": "1",
        "fields": "code",
    }
    base = Settings.CATALOG_BASE_URL.rstrip("/")
    return f"{base}/cgi/search.pl?{urlencode(params)}"


async def probe_catalog(
    fetcher: RemoteFetcher | None = None,
) -> HealthResult:
    """Issue a one-result search and classify the catalog's health."""
    client = fetcher if fetcher is not None else RemoteFetcher()
    source_id = Settings.CATALOG_BASE_URL

    start = time.monotonic()
    try:
        data = await client.fetch_json(
            _probe_url(), timeout_ms=_HEALTH_TIMEOUT_MS
        )
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        result = HealthResult(
            source_id=source_id,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )
    else:
        elapsed_ms = (time.monotonic() - start) * 1000
        if not isinstance(data, dict) or "products" not in data:
            result = HealthResult(
                source_id=source_id,
                status="down",
                latency_ms=elapsed_ms,
                message="Unexpected response shape",
            )
        elif elapsed_ms > Settings.HEALTH_SLOW_THRESHOLD_MS:
            result = HealthResult(
                source_id=source_id,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )
        else:
            result = HealthResult(
                source_id=source_id,
                status="ok",
                latency_ms=elapsed_ms,
                message="",
            )

    logger.info(
        "Health check %s: %s (%.0fms) %s",
        result.source_id,
        result.status,
        result.latency_ms,
        result.message,
    )
    return result
