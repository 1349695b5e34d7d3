"""Loads label definitions and run parameters, never failing the caller."""

from __future__ import annotations

import logging

from gmail_labeler.config.defaults import DEFAULTS, Defaults
from gmail_labeler.config.parameters import RunParameters, default_parameters, parse_parameters
from gmail_labeler.config.store import ConfigStore
from gmail_labeler.result import Degraded, Ok, Result

logger = logging.getLogger(__name__)


class ConfigResolver:
    """Reads the config store fresh on every call and fills in defaults.

    Args:
        store: Where the label and parameter tables live.
        defaults: Values substituted for anything missing or unreadable.
    """

    def __init__(self, store: ConfigStore, defaults: Defaults = DEFAULTS):
        self._store = store
        self._defaults = defaults

    def resolve_labels(self) -> Result[dict[str, str]]:
        fallback = dict(self._defaults.labels)
        try:
            rows = self._store.read_rows(self._defaults.labels_table)
        except Exception as e:
            logger.warning(f"Error reading label definitions, using defaults: {e}")
            return Degraded(fallback, f"label table unreadable: {e}")

        labels: dict[str, str] = {}
        for row in _two_cell_rows(rows):
            name, description = row
            labels[name] = description

        if not labels:
            logger.info("No label definitions found, using defaults")
            return Degraded(fallback, "label table empty")
        return Ok(labels)

    def resolve_parameters(self, user_email: str = "") -> Result[RunParameters]:
        try:
            rows = self._store.read_rows(self._defaults.parameters_table)
        except Exception as e:
            logger.warning(f"Error reading parameters, using defaults: {e}")
            return Degraded(
                default_parameters(self._defaults, user_email),
                f"parameter table unreadable: {e}",
            )

        try:
            parameters = parse_parameters(_two_cell_rows(rows), self._defaults, user_email)
        except Exception as e:
            logger.warning(f"Error parsing parameters, using defaults: {e}")
            return Degraded(
                default_parameters(self._defaults, user_email),
                f"parameter table malformed: {e}",
            )
        return Ok(parameters)


def _two_cell_rows(rows) -> list[tuple[str, str]]:
    """Keep rows whose first two cells are both non-empty."""
    kept = []
    for row in rows:
        if not isinstance(row, (list, tuple)):
            logger.debug(f"Skipping malformed row {row!r}")
            continue
        try:
            key, value = row[0], row[1]
        except (IndexError, TypeError, KeyError):
            logger.debug(f"Skipping malformed row {row!r}")
            continue
        key = str(key).strip() if key is not None else ""
        if not key or value is None or not str(value).strip():
            continue
        kept.append((key, value if isinstance(value, str) else str(value)))
    return kept
