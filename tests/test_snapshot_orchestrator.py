# tests/test_snapshot_orchestrator.py

"""Tests for the full snapshot run using in-memory collaborators."""

import unittest
from datetime import date

from fake_sheets import FakeSheetsClient

from src.models.errors import (
    EmptyAggregation,
    ExtractionFailed,
    StoreOperationFailed,
)
from src.services.renderer import SnapshotRenderer
from src.services.snapshot_orchestrator import (
    RunResult,
    SnapshotOrchestrator,
    prepare_table,
    snapshot_name,
)
from src.storage.snapshot_store import SnapshotStore

URL = "https://example.com/temperatures"
TODAY = date(2026, 10, 17)


class _FakeScraper:
    """Stub scraper returning a canned table."""

    def __init__(self, table: list[list[str]]) -> None:
        self.table = table
        self.urls: list[str] = []

    def fetch_raw_table(self, url: str) -> list[list[str]]:
        self.urls.append(url)
        return [list(row) for row in self.table]


class _BrokenScraper:
    """Stub scraper that cannot reach the page."""

    def fetch_raw_table(self, url: str) -> list[list[str]]:
        raise ExtractionFailed("Source page unreachable", {"url": url})


FAHRENHEIT_TABLE = [
    ["City", "Temperature"],
    ["Berlin", "68 F"],
    ["Rome", "86 F"],
    ["Reykjavik", "N/A"],
]


def _orchestrator(
    client: FakeSheetsClient, scraper: object,
) -> SnapshotOrchestrator:
    return SnapshotOrchestrator(
        store=SnapshotStore(client, max_snapshots=200),  # type: ignore[arg-type]
        renderer=SnapshotRenderer(client),  # type: ignore[arg-type]
        scraper=scraper,  # type: ignore[arg-type]
    )


class TestHelpers(unittest.TestCase):
    """Pure helpers used by the run."""

    def test_snapshot_name_is_iso_date(self) -> None:
        self.assertEqual(snapshot_name(TODAY), "2026-10-17")

    def test_snapshot_name_defaults_to_today(self) -> None:
        self.assertRegex(snapshot_name(), r"^\d{4}-\d{2}-\d{2}$")

    def test_prepare_table(self) -> None:
        prepared = prepare_table(FAHRENHEIT_TABLE)
        self.assertTrue(prepared.converted)
        self.assertEqual(
            prepared.rows,
            [
                ["Average", "25 °C"],
                ["City", "Temperature"],
                ["Berlin", "20 °C"],
                ["Rome", "30 °C"],
                ["Reykjavik", "N/A"],
            ],
        )


class TestRunOnce(unittest.IsolatedAsyncioTestCase):
    """SnapshotOrchestrator.run_once end to end."""

    async def test_writes_and_formats_new_snapshot(self) -> None:
        client = FakeSheetsClient(sheet_count=3)
        scraper = _FakeScraper(FAHRENHEIT_TABLE)

        result = await _orchestrator(client, scraper).run_once(URL, TODAY)

        self.assertIsInstance(result, RunResult)
        self.assertEqual(scraper.urls, [URL])
        self.assertEqual(result.snapshot.name, "2026-10-17")
        self.assertEqual(result.data_range, "A1:B5")
        self.assertEqual(result.average_cell, "25 °C")
        self.assertTrue(result.converted)
        self.assertIsNone(result.evicted)
        self.assertEqual(client.sheets[0][1], "2026-10-17")
        self.assertEqual(
            client.values["'2026-10-17'!A1:B5"][0], ["Average", "25 °C"]
        )
        self.assertEqual(client.batches[-1][0], "format")

    async def test_call_order(self) -> None:
        """List precedes create; write precedes format."""
        client = FakeSheetsClient(sheet_count=200)
        await _orchestrator(
            client, _FakeScraper(FAHRENHEIT_TABLE)
        ).run_once(URL, TODAY)
        self.assertEqual(
            client.calls, ["list", "delete", "create", "write", "format"]
        )

    async def test_full_history_stays_at_capacity(self) -> None:
        client = FakeSheetsClient(sheet_count=200)
        oldest = client.sheets[-1][0]

        result = await _orchestrator(
            client, _FakeScraper(FAHRENHEIT_TABLE)
        ).run_once(URL, TODAY)

        self.assertEqual(result.evicted, oldest)
        self.assertEqual(len(client.sheets), 200)
        self.assertNotIn(oldest, client.list_sheet_ids())

    async def test_celsius_table_not_converted(self) -> None:
        client = FakeSheetsClient()
        table = [["City", "Temperature"], ["Lima", "18 °C"]]
        result = await _orchestrator(
            client, _FakeScraper(table)
        ).run_once(URL, TODAY)
        self.assertFalse(result.converted)
        self.assertEqual(result.average_cell, "18 °C")

    async def test_extraction_failure_aborts_before_write(self) -> None:
        client = FakeSheetsClient()
        with self.assertRaises(ExtractionFailed):
            await _orchestrator(client, _BrokenScraper()).run_once(
                URL, TODAY
            )
        self.assertNotIn("write", client.calls)
        self.assertNotIn("format", client.calls)

    async def test_empty_table_aborts(self) -> None:
        client = FakeSheetsClient()
        table = [["City", "Temperature"], ["Lima", "N/A"]]
        with self.assertRaises(EmptyAggregation):
            await _orchestrator(client, _FakeScraper(table)).run_once(
                URL, TODAY
            )
        self.assertNotIn("write", client.calls)

    async def test_store_failure_aborts(self) -> None:
        client = FakeSheetsClient()
        client.fail_on.add("create")
        with self.assertRaises(StoreOperationFailed):
            await _orchestrator(
                client, _FakeScraper(FAHRENHEIT_TABLE)
            ).run_once(URL, TODAY)
        self.assertNotIn("write", client.calls)

    async def test_format_failure_keeps_written_data(self) -> None:
        client = FakeSheetsClient()
        client.fail_on.add("format")
        with self.assertRaises(StoreOperationFailed):
            await _orchestrator(
                client, _FakeScraper(FAHRENHEIT_TABLE)
            ).run_once(URL, TODAY)
        self.assertIn("'2026-10-17'!A1:B5", client.values)


if __name__ == "__main__":
    unittest.main()
