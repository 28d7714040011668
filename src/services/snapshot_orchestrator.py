# src/services/snapshot_orchestrator.py

"""Runs one snapshot cycle: list, evict, create, extract, write, format."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from src.models.snapshot import Snapshot, Table
from src.scrapers.table_scraper import TableScraper
from src.services.renderer import SnapshotRenderer
from src.storage.snapshot_store import SnapshotStore, compute_range
from src.transforms.aggregator import AverageAggregator
from src.transforms.normalizer import TemperatureNormalizer

logger = logging.getLogger("temp_snapshots.orchestrator")


@dataclass
class RunResult:
    """Outcome of a completed run."""

    snapshot: Snapshot
    data_range: str
    evicted: int | None = None
    converted: bool = False

    @property
    def average_cell(self) -> str:
        return self.snapshot.rows[0][1]


@dataclass
class PreparedTable:
    """Transformed payload plus whether a unit conversion happened."""

    rows: Table
    converted: bool


def snapshot_name(today: date | None = None) -> str:
    """ISO date used as the sheet name (UTC day when *today* is omitted)."""
    day = today or datetime.now(timezone.utc).date()
    return day.isoformat()


def prepare_table(raw: Table) -> PreparedTable:
    """Normalize units then prepend the summary row."""
    converted = TemperatureNormalizer.is_fahrenheit(raw)
    normalized = TemperatureNormalizer.normalize(raw)
    return PreparedTable(
        rows=AverageAggregator.prepend_average(normalized),
        converted=converted,
    )


async def extract_and_transform(
    scraper: TableScraper, url: str,
) -> PreparedTable:
    """Fetch the raw table off the event loop, then transform it."""
    raw = await asyncio.to_thread(scraper.fetch_raw_table, url)
    return prepare_table(raw)


class SnapshotOrchestrator:
    """Coordinates the store, the scraper and the renderer for one run.

    The store side (list, evict, create) and the data side (fetch,
    normalize, aggregate) share nothing, so they run as two concurrent
    tasks joined before the write.  Any failure aborts the run.
    """

    def __init__(
        self,
        store: SnapshotStore,
        renderer: SnapshotRenderer,
        scraper: TableScraper,
    ) -> None:
        self.store = store
        self.renderer = renderer
        self.scraper = scraper

    async def _make_room_and_create(
        self, name: str,
    ) -> tuple[Snapshot, int | None]:
        """List the history, evict if full, then create the new sheet."""
        index = await asyncio.to_thread(self.store.list_snapshots)
        evicted = await asyncio.to_thread(
            self.store.evict_oldest_if_full, index
        )
        snapshot = await asyncio.to_thread(
            self.store.create_snapshot, name
        )
        return snapshot, evicted

    async def run_once(
        self, url: str, today: date | None = None,
    ) -> RunResult:
        """Execute one full cycle and return what was stored."""
        name = snapshot_name(today)
        logger.info("Starting snapshot run %s for %s", name, url)

        (snapshot, evicted), prepared = await asyncio.gather(
            self._make_room_and_create(name),
            extract_and_transform(self.scraper, url),
        )

        data_range = compute_range(prepared.rows)
        await asyncio.to_thread(
            self.store.write_data, snapshot, data_range, prepared.rows
        )
        await asyncio.to_thread(self.renderer.format_snapshot, snapshot)

        logger.info(
            'finished writing data and formatting sheetId %d (name "%s")',
            snapshot.identifier,
            snapshot.name,
        )
        return RunResult(
            snapshot=snapshot,
            data_range=data_range,
            evicted=evicted,
            converted=prepared.converted,
        )
