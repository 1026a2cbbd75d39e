"""Tables: ordered column definitions plus stored rows.

A table enforces the constraints scoped to it:

- Primary key: every primary-key column holds present, pairwise distinct
  values. Each primary-key column is checked on its own.
- Foreign key: every present value in a foreign-key column equals some
  value in the referenced column of the referenced table, resolved through
  a ``TableLookup`` at insertion time.

Both checks are exhaustive scans of current state. No index is kept, so
each constrained column costs O(existing rows) per insert.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator

from reldb.domain.entities.column import ColumnDefinition
from reldb.domain.entities.row import Row
from reldb.domain.errors import (
    ArityMismatchError,
    ColumnNotFoundError,
    ForeignKeyViolation,
    PrimaryKeyViolation,
    ReferencedTableMissing,
)
from reldb.domain.value_objects import Value, is_present, values_match

if TYPE_CHECKING:
    from reldb.ports.outbound import TableLookup


class Table:
    """A named table.

    Column order is insertion order and never changes. Row order is
    insertion order until a delete compacts the storage, which keeps the
    survivors' relative order.
    """

    def __init__(self, name: str, columns: Iterable[ColumnDefinition] = ()) -> None:
        self._name = name.strip().lower()
        self._columns: list[ColumnDefinition] = []
        self._rows: list[Row] = []
        for column in columns:
            self.add_column(column)

    @classmethod
    def from_result(
        cls, name: str, columns: Iterable[ColumnDefinition], rows: Iterable[Row]
    ) -> Table:
        """Build an unregistered result table.

        The rows come from tables whose constraints already hold, so they
        are stored without re-validation. Callers pass copies.
        """
        table = cls(name, columns)
        table._rows = list(rows)
        return table

    @property
    def name(self) -> str:
        return self._name

    @property
    def columns(self) -> tuple[ColumnDefinition, ...]:
        return tuple(self._columns)

    @property
    def rows(self) -> tuple[Row, ...]:
        return tuple(self._rows)

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def column_names(self) -> list[str]:
        return [column.name for column in self._columns]

    def add_column(self, column: ColumnDefinition) -> None:
        """Append a column definition."""
        self._columns.append(column)

    def column_index(self, name: str) -> int | None:
        """Position of the named column (case-insensitive, trimmed), or None."""
        wanted = name.strip().lower()
        for index, column in enumerate(self._columns):
            if column.name == wanted:
                return index
        return None

    def column_at(self, index: int) -> ColumnDefinition:
        return self._columns[index]

    def references(self, table_name: str) -> bool:
        """Return True if any of this table's foreign keys targets ``table_name``."""
        return any(column.references(table_name) for column in self._columns)

    def insert_row(self, row: Row, lookup: TableLookup) -> None:
        """Validate a row against every constraint, then append it.

        Primary keys are checked before foreign keys. Nothing is stored
        unless all checks pass.

        Args:
            row: Row whose width equals the table's column count.
            lookup: Resolves tables referenced by foreign keys.

        Raises:
            ArityMismatchError: If the row width differs from the column count.
            PrimaryKeyViolation: If a primary-key value is absent or duplicated.
            ReferencedTableMissing: If a referenced table no longer exists.
            ColumnNotFoundError: If a referenced column no longer exists.
            ForeignKeyViolation: If a foreign-key value has no match.
        """
        if len(row) != self.column_count:
            raise ArityMismatchError(
                f"Row has {len(row)} values but table '{self._name}' has {self.column_count} columns."
            )
        self._check_primary_keys(row)
        self._check_foreign_keys(row, lookup)
        self._rows.append(row)

    def delete_rows(self, column_name: str, value: Value) -> int:
        """Remove every row whose value in ``column_name`` matches ``value``.

        Rows with an absent value in that column are kept. Survivors keep
        their relative order.

        Returns:
            The number of rows removed.

        Raises:
            ColumnNotFoundError: If the column does not exist.
        """
        index = self.column_index(column_name)
        if index is None:
            raise ColumnNotFoundError(
                f"Column '{column_name.strip().lower()}' not found in table '{self._name}'."
            )

        survivors = [row for row in self._rows if not values_match(row[index], value)]
        removed = len(self._rows) - len(survivors)
        self._rows = survivors
        return removed

    def _check_primary_keys(self, row: Row) -> None:
        for index, column in enumerate(self._columns):
            if not column.is_primary_key:
                continue
            candidate = row[index]
            if not is_present(candidate):
                raise PrimaryKeyViolation(
                    f"Primary key violation: value cannot be null for column '{column.name}'."
                )
            for existing in self._rows:
                if values_match(existing[index], candidate):
                    raise PrimaryKeyViolation(
                        f"Primary key violation: value '{candidate}' already exists "
                        f"for column '{column.name}'."
                    )

    def _check_foreign_keys(self, row: Row, lookup: TableLookup) -> None:
        for index, column in enumerate(self._columns):
            fk = column.foreign_key
            if fk is None:
                continue
            candidate = row[index]
            if not is_present(candidate):
                continue

            target = lookup.get_table(fk.table)
            if target is None:
                raise ReferencedTableMissing(f"Referenced table '{fk.table}' does not exist.")

            target_index = target.column_index(fk.column)
            if target_index is None:
                raise ColumnNotFoundError(
                    f"Referenced column '{fk.column}' not found in table '{fk.table}'."
                )

            if not any(values_match(other[target_index], candidate) for other in target._rows):
                raise ForeignKeyViolation(
                    f"Foreign key violation: value '{candidate}' does not exist "
                    f"in table '{fk.table}'."
                )

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return f"Table({self._name!r}, columns={self.column_names()}, rows={len(self._rows)})"
