# src/models/snapshot.py

"""Dated snapshot model and the table types that flow between stages."""

from dataclasses import dataclass, field

Row = list[str]
Table = list[Row]

SUMMARY_LABEL = "Average"
NOT_AVAILABLE = "N/A"
CELSIUS_SUFFIX = "°C"


def format_celsius(value: int) -> str:
    """Render a whole-degree value as a measurement cell (``"21 °C"``)."""
    return f"{value} {CELSIUS_SUFFIX}"


@dataclass
class Snapshot:
    """One dated sheet of the history.

    ``name`` is an ISO date (``YYYY-MM-DD``), so lexicographic order is
    chronological.  ``identifier`` is the sheet id the store assigned at
    creation.  ``rows`` holds the summary row, the header, then data rows.
    """

    name: str
    identifier: int
    rows: Table = field(default_factory=lambda: list[Row]())

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0
