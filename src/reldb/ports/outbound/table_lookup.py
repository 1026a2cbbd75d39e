"""Table lookup port used for referential checks.

A table validating a foreign key needs to read the referenced table's
current rows. It does so through this port instead of reaching for a
global catalog, so that any registry (the catalog, or a stub in tests)
can serve the lookup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from reldb.domain.entities.table import Table


class TableLookup(Protocol):
    """Resolves table names to live tables."""

    def get_table(self, name: str) -> Table | None:
        """Return the table registered under ``name`` (case-insensitive), or None."""
        ...
