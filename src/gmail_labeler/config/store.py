"""Abstract config store plus an in-memory implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gmail_labeler.exceptions import ConfigStoreError


class ConfigStore(ABC):
    """Key/value tables holding label definitions and run parameters."""

    @abstractmethod
    def read_rows(self, table: str) -> list[tuple[str, str]]:
        """Return the ``(key, value)`` rows of a table, header excluded.

        Raises:
            ConfigStoreError: the table does not exist or cannot be read.
        """
        ...


class InMemoryConfigStore(ConfigStore):
    """Config store backed by plain dicts of rows.

    Args:
        tables: table name -> list of rows. Rows may be ragged; the
            resolver decides what to do with them.
    """

    def __init__(self, tables: dict[str, list] | None = None):
        self._tables = {name: list(rows) for name, rows in (tables or {}).items()}

    def read_rows(self, table: str) -> list:
        if table not in self._tables:
            raise ConfigStoreError(f"Table {table!r} not found")
        return list(self._tables[table])

    def set_rows(self, table: str, rows: list) -> None:
        self._tables[table] = list(rows)
