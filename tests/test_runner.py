# tests/test_runner.py

"""Tests for the headless run modes and the CLI entry point."""

import unittest
from unittest.mock import MagicMock, patch

from fake_sheets import FakeSheetsClient

import main
from src.cli import runner
from src.models.errors import ExtractionFailed, StoreOperationFailed

URL = "https://example.com/temperatures"
TABLE = [
    ["City", "Temperature"],
    ["Berlin", "20 °C"],
    ["Rome", "30 °C"],
]


def _scraper_cls(table: list[list[str]] | None = None) -> MagicMock:
    """Build a TableScraper replacement returning *table* (or failing)."""
    scraper = MagicMock()
    if table is None:
        scraper.fetch_raw_table.side_effect = ExtractionFailed("down")
    else:
        scraper.fetch_raw_table.return_value = table
    return MagicMock(return_value=scraper)


class TestRunSnapshot(unittest.IsolatedAsyncioTestCase):
    """runner.run_snapshot exit codes."""

    async def test_success_returns_zero(self) -> None:
        client = FakeSheetsClient(sheet_count=2)
        with patch.object(
            runner.SheetsClient, "from_settings", return_value=client
        ), patch.object(runner, "TableScraper", _scraper_cls(TABLE)):
            code = await runner.run_snapshot(URL, "sheet-1")
        self.assertEqual(code, runner.EXIT_OK)
        self.assertEqual(len(client.sheets), 3)

    async def test_extraction_failure_returns_one(self) -> None:
        client = FakeSheetsClient()
        with patch.object(
            runner.SheetsClient, "from_settings", return_value=client
        ), patch.object(runner, "TableScraper", _scraper_cls(None)):
            code = await runner.run_snapshot(URL, "sheet-1")
        self.assertEqual(code, runner.EXIT_FAILED)

    async def test_authorize_failure_returns_one(self) -> None:
        with patch.object(
            runner.SheetsClient,
            "from_settings",
            side_effect=StoreOperationFailed("authorize", "bad key"),
        ):
            code = await runner.run_snapshot(URL, "sheet-1")
        self.assertEqual(code, runner.EXIT_FAILED)


class TestRunDry(unittest.IsolatedAsyncioTestCase):
    """runner.run_dry never touches the store."""

    async def test_dry_run_prints_without_store(self) -> None:
        with patch.object(
            runner, "TableScraper", _scraper_cls(TABLE)
        ), patch.object(
            runner.SheetsClient, "from_settings"
        ) as mock_connect:
            code = await runner.run_dry(URL)
        self.assertEqual(code, runner.EXIT_OK)
        mock_connect.assert_not_called()

    async def test_dry_run_failure(self) -> None:
        with patch.object(runner, "TableScraper", _scraper_cls(None)):
            code = await runner.run_dry(URL)
        self.assertEqual(code, runner.EXIT_FAILED)


class TestCheckConfig(unittest.TestCase):
    """runner.check_config honours CLI overrides."""

    @patch.object(runner.Settings, "missing_required")
    def test_override_satisfies_requirement(
        self, mock_missing: MagicMock,
    ) -> None:
        mock_missing.return_value = ["CRAWL_URL"]
        self.assertTrue(
            runner.check_config(["CRAWL_URL"], {"CRAWL_URL": URL})
        )

    @patch.object(runner.Settings, "missing_required")
    def test_missing_value_fails(self, mock_missing: MagicMock) -> None:
        mock_missing.return_value = ["GOOGLE_PRIVATE_KEY"]
        self.assertFalse(
            runner.check_config(["GOOGLE_PRIVATE_KEY"], {})
        )

    @patch.object(runner.Settings, "missing_required")
    def test_unneeded_value_ignored(self, mock_missing: MagicMock) -> None:
        mock_missing.return_value = ["GOOGLE_PRIVATE_KEY"]
        self.assertTrue(runner.check_config(["CRAWL_URL"], {}))


class TestMain(unittest.TestCase):
    """main.main routing and exit codes."""

    @patch.object(runner.Settings, "missing_required", return_value=[])
    @patch.object(runner, "run_snapshot")
    def test_default_mode_runs_snapshot(
        self, mock_run: MagicMock, _mock_missing: MagicMock,
    ) -> None:
        async def fake_run(url: str, spreadsheet_id: str | None) -> int:
            return 0

        mock_run.side_effect = fake_run
        with self.assertRaises(SystemExit) as ctx:
            main.main(["--url", URL])
        self.assertEqual(ctx.exception.code, 0)
        mock_run.assert_called_once_with(URL, None)

    @patch.object(runner.Settings, "missing_required")
    def test_missing_config_exits_two(
        self, mock_missing: MagicMock,
    ) -> None:
        mock_missing.return_value = ["GOOGLE_PRIVATE_KEY"]
        with self.assertRaises(SystemExit) as ctx:
            main.main(["--url", URL])
        self.assertEqual(ctx.exception.code, runner.EXIT_CONFIG)

    @patch.object(
        runner.Settings,
        "missing_required",
        return_value=["GOOGLE_PRIVATE_KEY", "GOOGLE_SPREADSHEET_ID"],
    )
    @patch.object(runner, "run_dry")
    def test_dry_run_needs_only_url(
        self, mock_dry: MagicMock, _mock_missing: MagicMock,
    ) -> None:
        async def fake_dry(url: str) -> int:
            return 1

        mock_dry.side_effect = fake_dry
        with self.assertRaises(SystemExit) as ctx:
            main.main(["--dry-run", "--url", URL])
        self.assertEqual(ctx.exception.code, 1)
        mock_dry.assert_called_once_with(URL)


if __name__ == "__main__":
    unittest.main()
