# src/services/renderer.py

"""Formatting batch applied once to a freshly written snapshot sheet."""

import logging
from typing import Any

from src.models.snapshot import Snapshot, Table
from src.storage.sheets_client import SheetsClient

logger = logging.getLogger("temp_snapshots.renderer")

_SOLID = {"style": "SOLID", "width": 1}
_BORDER_EDGES = (
    "top", "bottom", "left", "right", "innerHorizontal", "innerVertical",
)

# Row 0 is the summary row, row 1 the header
_HEADER_ROW = 1
_CENTERED_COLUMNS = 2


def _spacer_row(sheet_id: int, at: int) -> dict[str, Any]:
    return {
        "insertDimension": {
            "range": {
                "sheetId": sheet_id,
                "dimension": "ROWS",
                "startIndex": at,
                "endIndex": at + 1,
            },
            "inheritFromBefore": False,
        }
    }


def build_format_requests(
    sheet_id: int, rows: Table,
) -> list[dict[str, Any]]:
    """Build the ``batchUpdate`` requests for a written payload.

    Order matters: borders, bold header, centering, grid trim and
    autosize address the payload as written; the two spacer rows are
    inserted last (above the summary row and between summary and header).
    """
    row_count = len(rows)
    column_count = len(rows[0])

    borders: dict[str, Any] = {
        "range": {
            "sheetId": sheet_id,
            "startRowIndex": _HEADER_ROW,
            "endRowIndex": row_count,
            "startColumnIndex": 0,
            "endColumnIndex": column_count,
        },
    }
    borders.update({edge: dict(_SOLID) for edge in _BORDER_EDGES})

    return [
        {"updateBorders": borders},
        {
            "repeatCell": {
                "range": {
                    "sheetId": sheet_id,
                    "startRowIndex": _HEADER_ROW,
                    "endRowIndex": _HEADER_ROW + 1,
                },
                "cell": {
                    "userEnteredFormat": {"textFormat": {"bold": True}},
                },
                "fields": "userEnteredFormat.textFormat.bold",
            }
        },
        {
            "repeatCell": {
                "range": {
                    "sheetId": sheet_id,
                    "startColumnIndex": 0,
                    "endColumnIndex": _CENTERED_COLUMNS,
                },
                "cell": {
                    "userEnteredFormat": {"horizontalAlignment": "CENTER"},
                },
                "fields": "userEnteredFormat.horizontalAlignment",
            }
        },
        {
            "updateSheetProperties": {
                "properties": {
                    "sheetId": sheet_id,
                    "gridProperties": {
                        "rowCount": row_count,
                        "columnCount": column_count,
                    },
                },
                "fields": "gridProperties(rowCount,columnCount)",
            }
        },
        {
            "autoResizeDimensions": {
                "dimensions": {
                    "sheetId": sheet_id,
                    "dimension": "COLUMNS",
                    "startIndex": 0,
                    "endIndex": column_count,
                }
            }
        },
        _spacer_row(sheet_id, 0),
        _spacer_row(sheet_id, 2),
    ]


class SnapshotRenderer:
    """Applies the formatting batch through an explicit client handle."""

    def __init__(self, client: SheetsClient) -> None:
        self.client = client

    def format_snapshot(self, snapshot: Snapshot) -> None:
        """Format *snapshot* in one batch; call after its data is written."""
        if not snapshot.rows:
            raise ValueError(
                f"Snapshot {snapshot.name} has no rows to format"
            )
        requests = build_format_requests(snapshot.identifier, snapshot.rows)
        self.client.batch_update("format", requests)
        logger.info(
            "Formatted snapshot %s (%d directives)",
            snapshot.name,
            len(requests),
        )
