"""Process-level settings read from the environment.

User-tunable run parameters live in the config store, not here.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

CLIENT_SECRET_FILE = Path(os.environ.get("GMAIL_LABELER_CLIENT_SECRET", "credentials.json"))
TOKEN_FILE = Path(os.environ.get("GMAIL_LABELER_TOKEN_FILE", "token.json"))
LOCK_DIR = Path(os.environ.get("GMAIL_LABELER_LOCK_DIR", tempfile.gettempdir()))

LABELS_SHEET_NAME = os.environ.get("GMAIL_LABELER_LABELS_SHEET", "Gmail Labeler Labels")
PARAMETERS_SHEET_NAME = os.environ.get("GMAIL_LABELER_PARAMETERS_SHEET", "Gmail Labeler Parameters")

LOG_LEVEL = os.environ.get("GMAIL_LABELER_LOG_LEVEL", "INFO")

SCOPES = [
    "https://www.googleapis.com/auth/gmail.modify",
    "https://www.googleapis.com/auth/gmail.send",
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.metadata.readonly",
]


def configure_logging(level: str | None = None) -> None:
    """Attach a stream handler to the root logger. Meant for scripts, not library code."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
