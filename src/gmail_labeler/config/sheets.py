"""Config store backed by Google Sheets, looked up by spreadsheet name."""

from __future__ import annotations

import logging
from typing import Any

from gmail_labeler.config.store import ConfigStore
from gmail_labeler.exceptions import ConfigStoreError

logger = logging.getLogger(__name__)

_SPREADSHEET_MIME = "application/vnd.google-apps.spreadsheet"


class SheetsConfigStore(ConfigStore):
    """Read two-column tables from spreadsheets in the user's Drive.

    Each table is its own spreadsheet (named after the table); rows are read
    from columns A:B of the first sheet, skipping the header row.

    Args:
        credentials: A google.oauth2.credentials.Credentials object with
            Drive metadata and Sheets read scopes.
    """

    def __init__(self, credentials):
        try:
            from googleapiclient.discovery import build
        except ImportError:
            raise ImportError(
                "google-api-python-client is required for SheetsConfigStore. "
                "Install with: pip install gmail-labeler"
            )
        self._drive = build("drive", "v3", credentials=credentials, cache_discovery=False)
        self._sheets = build("sheets", "v4", credentials=credentials, cache_discovery=False)

    def _find_spreadsheet(self, name: str) -> str:
        escaped = name.replace("\\", "\\\\").replace("'", "\\'")
        response = self._drive.files().list(
            q=f"name = '{escaped}' and mimeType = '{_SPREADSHEET_MIME}' and trashed = false",
            fields="files(id, name)",
            pageSize=1,
        ).execute()
        files = response.get("files", [])
        if not files:
            raise ConfigStoreError(f"Spreadsheet {name!r} not found")
        return files[0]["id"]

    def read_rows(self, table: str) -> list[tuple[str, str]]:
        try:
            spreadsheet_id = self._find_spreadsheet(table)
            result = self._sheets.spreadsheets().values().get(
                spreadsheetId=spreadsheet_id,
                range="A2:B",
                valueRenderOption="UNFORMATTED_VALUE",
            ).execute()
        except ConfigStoreError:
            raise
        except Exception as e:
            raise ConfigStoreError(f"Failed to read {table!r}: {e}") from e

        rows = result.get("values", [])
        logger.debug(f"Read {len(rows)} rows from {table!r}")
        return [_pad(row) for row in rows]


def _pad(row: list[Any]) -> tuple[str, str]:
    cells = [str(cell).strip() for cell in row[:2]]
    while len(cells) < 2:
        cells.append("")
    return cells[0], cells[1]
