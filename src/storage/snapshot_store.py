# src/storage/snapshot_store.py

"""Bounded, newest-first history of dated snapshot sheets."""

import logging

from src.config.settings import Settings
from src.models.snapshot import Snapshot, Table
from src.storage.sheets_client import SheetsClient

logger = logging.getLogger("temp_snapshots.store")

_MAX_COLUMNS = 26


def column_letter(column: int) -> str:
    """Map a 1-based column number to its A1 letter (1 -> ``A``).

    Only single-letter columns (``A``..``Z``) are supported.
    """
    if not 1 <= column <= _MAX_COLUMNS:
        raise ValueError(
            f"Column {column} outside A..Z; multi-letter columns "
            "are not supported"
        )
    return chr(ord("A") + column - 1)


def compute_range(rows: Table) -> str:
    """Return the A1 rectangle a payload occupies, anchored at ``A1``."""
    if not rows or not rows[0]:
        raise ValueError("Cannot compute a range for an empty payload")
    return f"A1:{column_letter(len(rows[0]))}{len(rows)}"


def a1_address(sheet_name: str, data_range: str) -> str:
    """Qualify *data_range* with a quoted sheet name (``'Name'!A1:B4``)."""
    quoted = sheet_name.replace("'", "''")
    return f"'{quoted}'!{data_range}"


class SnapshotStore:
    """Create, evict and fill snapshot sheets in one spreadsheet.

    New snapshots are inserted at tab position 0, so the spreadsheet's
    tab order is newest first and the last tab is treated as the oldest.
    """

    def __init__(
        self,
        client: SheetsClient,
        max_snapshots: int = Settings.MAX_SNAPSHOTS,
    ) -> None:
        self.client = client
        self.max_snapshots = max_snapshots

    def list_snapshots(self) -> list[int]:
        """Read the current history index (sheet ids, store order)."""
        index = self.client.list_sheet_ids()
        logger.info(
            "History holds %d/%d snapshots",
            len(index),
            self.max_snapshots,
        )
        return index

    def evict_oldest_if_full(self, index: list[int]) -> int | None:
        """Delete the last-listed snapshot when the history is full.

        Evicts at most one snapshot and does not re-read the index.
        Returns the deleted sheet id, or ``None`` if nothing was evicted.
        """
        if len(index) < self.max_snapshots:
            return None
        oldest = index[-1]
        self.client.delete_sheet(oldest)
        logger.info("Evicted oldest snapshot sheetId %d", oldest)
        if len(index) - 1 >= self.max_snapshots:
            logger.warning(
                "History still holds %d snapshots after eviction",
                len(index) - 1,
            )
        return oldest

    def create_snapshot(self, name: str) -> Snapshot:
        """Insert an empty sheet called *name* at the front of the history."""
        identifier = self.client.add_sheet(name, index=0)
        logger.info("Created snapshot %s (sheetId %d)", name, identifier)
        return Snapshot(name=name, identifier=identifier)

    def write_data(
        self, snapshot: Snapshot, data_range: str, rows: Table,
    ) -> None:
        """Overwrite *data_range* of the snapshot sheet with raw values."""
        self.client.update_values(
            a1_address(snapshot.name, data_range), rows,
        )
        snapshot.rows = [list(row) for row in rows]
        logger.debug(
            "Wrote %d rows to %s!%s",
            len(rows),
            snapshot.name,
            data_range,
        )
