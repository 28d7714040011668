# src/cli/runner.py

"""Headless run modes: one snapshot run, a dry run, or a health check."""

import logging

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.models.errors import SnapshotJobError
from src.models.snapshot import Table as RowTable
from src.scrapers.table_scraper import TableScraper
from src.services.renderer import SnapshotRenderer
from src.services.snapshot_orchestrator import (
    SnapshotOrchestrator,
    extract_and_transform,
)
from src.storage.sheets_client import SheetsClient
from src.storage.snapshot_store import SnapshotStore

logger = logging.getLogger("temp_snapshots.cli")

# Stderr console for status messages so stdout stays clean
_err = Console(stderr=True)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def check_config(
    needed: list[str], overrides: dict[str, str | None],
) -> bool:
    """Report required env vars that are unset and not overridden."""
    missing = [
        name
        for name in Settings.missing_required()
        if name in needed and not overrides.get(name)
    ]
    if missing:
        _err.print(
            f"[red]Missing configuration: {', '.join(missing)}[/red]"
        )
        logger.error("Missing configuration: %s", ", ".join(missing))
        return False
    return True


def _print_rows(rows: RowTable, title: str) -> None:
    """Render a snapshot payload as a Rich table on stdout."""
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    for heading in rows[1]:
        table.add_column(heading, justify="center")
    table.add_row(*rows[0], style="bold green")
    for row in rows[2:]:
        table.add_row(*row)
    Console().print(table)


async def run_snapshot(url: str, spreadsheet_id: str | None) -> int:
    """Run one full cycle and return an exit code (0=ok, 1=fail)."""
    try:
        client = SheetsClient.from_settings(spreadsheet_id)
        orchestrator = SnapshotOrchestrator(
            store=SnapshotStore(client),
            renderer=SnapshotRenderer(client),
            scraper=TableScraper(),
        )
        result = await orchestrator.run_once(url)
    except SnapshotJobError as exc:
        logger.error("Snapshot run aborted: %s", exc, exc_info=True)
        _err.print(f"[red]Run failed: {exc}[/red]")
        return EXIT_FAILED

    if result.evicted is not None:
        _err.print(
            f"[dim]Evicted oldest snapshot sheetId {result.evicted}[/dim]"
        )
    _err.print(
        f"[green]✓ Snapshot {result.snapshot.name} "
        f"(sheetId {result.snapshot.identifier}) "
        f"{result.data_range}, average {result.average_cell}[/green]"
    )
    return EXIT_OK


async def run_dry(url: str) -> int:
    """Extract and transform only, printing the payload."""
    try:
        prepared = await extract_and_transform(TableScraper(), url)
    except SnapshotJobError as exc:
        logger.error("Dry run aborted: %s", exc, exc_info=True)
        _err.print(f"[red]Dry run failed: {exc}[/red]")
        return EXIT_FAILED

    if prepared.converted:
        _err.print("[dim]Converted Fahrenheit values to Celsius[/dim]")
    _print_rows(prepared.rows, title=f"Preview: {url}")
    return EXIT_OK


async def run_health_check(url: str, spreadsheet_id: str | None) -> int:
    """Probe the source page and the spreadsheet."""
    from src.services.health_checker import HealthChecker

    _err.print("[bold]Running health check...[/bold]")
    try:
        client = SheetsClient.from_settings(spreadsheet_id)
    except SnapshotJobError as exc:
        _err.print(f"[red]Cannot connect to Google Sheets: {exc}[/red]")
        return EXIT_FAILED
    checker = HealthChecker(TableScraper(), client, url)
    results = await checker.check_all()

    table = Table(
        title="Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Target", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]OK[/green]"
        elif r.status == "slow":
            status = "[yellow]SLOW[/yellow]"
        else:
            status = "[red]DOWN[/red]"
            any_down = True
        latency = f"{r.latency_ms:.0f}ms" if r.latency_ms > 0 else "—"
        table.add_row(r.target, status, latency, r.message)

    Console().print(table)
    return EXIT_FAILED if any_down else EXIT_OK
