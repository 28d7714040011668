# src/storage/sheets_client.py

"""Thin Google Sheets API wrapper for one spreadsheet.

Each method issues exactly one API call and converts any failure into
:class:`StoreOperationFailed`.  The client is created once per run and
passed explicitly to the store and the renderer.
"""

import logging
from typing import Any

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import Error as ApiClientError

from src.config.settings import Settings
from src.models.errors import StoreOperationFailed

logger = logging.getLogger("temp_snapshots.sheets")

# ApiClientError covers HttpError; httplib2 transport errors are separate
_STORE_ERRORS = (
    ApiClientError,
    httplib2.HttpLib2Error,
    GoogleAuthError,
    OSError,
)


def build_credentials(
    client_email: str, private_key: str,
) -> service_account.Credentials:
    """Build service-account credentials from environment-style values.

    Keys copied into a single-line env var carry literal ``\\n``
    sequences; those are turned back into newlines.
    """
    info = {
        "type": "service_account",
        "client_email": client_email,
        "private_key": private_key.replace("\\n", "\n"),
        "token_uri": Settings.TOKEN_URI,
    }
    return service_account.Credentials.from_service_account_info(
        info, scopes=Settings.SHEETS_SCOPES,
    )


class SheetsClient:
    """Google Sheets v4 operations scoped to a single spreadsheet."""

    def __init__(self, spreadsheet_id: str, service: Any) -> None:
        self.spreadsheet_id = spreadsheet_id
        self._service = service

    @classmethod
    def from_settings(
        cls, spreadsheet_id: str | None = None,
    ) -> "SheetsClient":
        """Authorize with the configured service account and connect."""
        try:
            credentials = build_credentials(
                Settings.SERVICE_ACCOUNT_EMAIL, Settings.PRIVATE_KEY,
            )
            service = build(
                "sheets",
                "v4",
                credentials=credentials,
                cache_discovery=False,
            )
        except (ValueError, *_STORE_ERRORS) as exc:
            raise StoreOperationFailed("authorize", str(exc)) from exc
        logger.debug("Connected to Google Sheets API")
        return cls(spreadsheet_id or Settings.SPREADSHEET_ID, service)

    def _execute(self, operation: str, request: Any) -> Any:
        """Run a prepared API request, wrapping failures."""
        try:
            return request.execute()
        except _STORE_ERRORS as exc:
            logger.error(
                "Sheets %s failed for %s: %s",
                operation,
                self.spreadsheet_id,
                exc,
                exc_info=True,
            )
            raise StoreOperationFailed(operation, str(exc)) from exc

    # ── Reads ────────────────────────────────────────────

    def get_title(self) -> str:
        """Return the spreadsheet title (cheap reachability probe)."""
        result = self._execute(
            "get",
            self._service.spreadsheets().get(
                spreadsheetId=self.spreadsheet_id,
                fields="properties.title",
            ),
        )
        return str(result["properties"]["title"])

    def list_sheet_ids(self) -> list[int]:
        """Return every sheet id in the spreadsheet's tab order."""
        result = self._execute(
            "list",
            self._service.spreadsheets().get(
                spreadsheetId=self.spreadsheet_id,
                fields="sheets.properties(sheetId,title,index)",
            ),
        )
        return [
            int(sheet["properties"]["sheetId"])
            for sheet in result.get("sheets", [])
        ]

    # ── Writes ───────────────────────────────────────────

    def batch_update(
        self, operation: str, requests: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Send a ``batchUpdate`` and return the raw response."""
        response: dict[str, Any] = self._execute(
            operation,
            self._service.spreadsheets().batchUpdate(
                spreadsheetId=self.spreadsheet_id,
                body={"requests": requests},
            ),
        )
        return response

    def add_sheet(self, title: str, index: int = 0) -> int:
        """Create a sheet at *index* and return its new sheet id."""
        response = self.batch_update(
            "create",
            [{"addSheet": {"properties": {"title": title, "index": index}}}],
        )
        try:
            return int(
                response["replies"][0]["addSheet"]["properties"]["sheetId"]
            )
        except (KeyError, IndexError, TypeError) as exc:
            raise StoreOperationFailed(
                "create", f"unexpected addSheet reply: {response!r}",
            ) from exc

    def delete_sheet(self, sheet_id: int) -> None:
        """Delete the sheet with *sheet_id*."""
        self.batch_update(
            "delete", [{"deleteSheet": {"sheetId": sheet_id}}],
        )

    def update_values(
        self, a1_range: str, values: list[list[str]],
    ) -> None:
        """Overwrite *a1_range* with raw (uninterpreted) values."""
        self._execute(
            "write",
            self._service.spreadsheets().values().update(
                spreadsheetId=self.spreadsheet_id,
                range=a1_range,
                valueInputOption="RAW",
                body={"values": values},
            ),
        )
