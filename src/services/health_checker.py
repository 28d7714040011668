# src/services/health_checker.py

"""Connectivity check for the source page and the spreadsheet."""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from src.scrapers.table_scraper import TableScraper
from src.storage.sheets_client import SheetsClient

logger = logging.getLogger("temp_snapshots.health")

_SLOW_MS = 5000


@dataclass
class HealthResult:
    """Result of a single dependency probe."""

    target: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def _timed(target: str, probe: Callable[[], str]) -> HealthResult:
    """Run *probe*, classifying it by outcome and latency."""
    start = time.monotonic()
    try:
        message = probe()
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            target=target,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )
    elapsed_ms = (time.monotonic() - start) * 1000
    if elapsed_ms > _SLOW_MS:
        return HealthResult(
            target=target,
            status="slow",
            latency_ms=elapsed_ms,
            message="High latency",
        )
    return HealthResult(
        target=target,
        status="ok",
        latency_ms=elapsed_ms,
        message=message,
    )


def probe_source(scraper: TableScraper, url: str) -> HealthResult:
    """Fetch the source page and confirm the table selector matches."""

    def probe() -> str:
        table = scraper.fetch_raw_table(url)
        return f"{len(table) - 1} rows"

    return _timed("source", probe)


def probe_store(client: SheetsClient) -> HealthResult:
    """Read the spreadsheet title and tab count."""

    def probe() -> str:
        title = client.get_title()
        return f"{title} ({len(client.list_sheet_ids())} sheets)"

    return _timed("spreadsheet", probe)


class HealthChecker:
    """Runs both probes concurrently."""

    def __init__(
        self, scraper: TableScraper, client: SheetsClient, url: str,
    ) -> None:
        self.scraper = scraper
        self.client = client
        self.url = url

    async def check_all(self) -> list[HealthResult]:
        """Probe the source page and the spreadsheet."""
        results: list[HealthResult] = list(
            await asyncio.gather(
                asyncio.to_thread(probe_source, self.scraper, self.url),
                asyncio.to_thread(probe_store, self.client),
            )
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.target,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
