"""Catalog of live tables.

The catalog owns table lifecycle. A table exists from the moment it is
created until it is explicitly dropped, and a drop is refused while any
foreign key in the catalog still targets it.

Each engine constructs its own catalog; there is no process-wide instance.
"""

from __future__ import annotations

import logging
from typing import Iterator

from reldb.domain.entities.table import Table
from reldb.domain.errors import (
    DuplicateTableError,
    ReferentialIntegrityError,
    TableNotFoundError,
)

logger = logging.getLogger(__name__)


class Catalog:
    """Registry of tables keyed by lowercase name.

    Implements the ``TableLookup`` port used by tables for foreign key checks.
    """

    def __init__(self) -> None:
        self._tables: dict[str, Table] = {}

    def create_table(self, table: Table) -> None:
        """Register a table.

        Raises:
            DuplicateTableError: If a table with the same name exists.
        """
        if table.name in self._tables:
            raise DuplicateTableError(f"Table '{table.name}' already exists.")
        self._tables[table.name] = table
        logger.info(f"Table {table.name} created with {table.column_count} columns")

    def drop_table(self, name: str) -> None:
        """Remove a table.

        Every foreign key in the catalog is checked first, including the
        table's own, so a self-referencing table cannot be dropped.

        Raises:
            ReferentialIntegrityError: If any foreign key targets the table.
            TableNotFoundError: If the table is not registered.
        """
        wanted = name.strip().lower()
        for table in self._tables.values():
            if table.references(wanted):
                raise ReferentialIntegrityError(
                    f"Cannot drop table '{wanted}': it is referenced by a foreign key "
                    f"in table '{table.name}'."
                )

        if wanted not in self._tables:
            raise TableNotFoundError(f"Table '{wanted}' not found.")

        del self._tables[wanted]
        logger.info(f"Table {wanted} dropped")

    def get_table(self, name: str) -> Table | None:
        """Return the table registered under ``name`` (case-insensitive), or None."""
        return self._tables.get(name.strip().lower())

    def require_table(self, name: str) -> Table:
        """Return the named table.

        Raises:
            TableNotFoundError: If the table is not registered.
        """
        table = self.get_table(name)
        if table is None:
            raise TableNotFoundError(f"Table '{name.strip().lower()}' not found.")
        return table

    def table_names(self) -> list[str]:
        """Names of all registered tables, in creation order."""
        return list(self._tables)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._tables

    def __iter__(self) -> Iterator[Table]:
        return iter(list(self._tables.values()))

    def __len__(self) -> int:
        return len(self._tables)
