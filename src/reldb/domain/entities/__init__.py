"""Domain entities for the relational engine.

Exports:
    Columns:
        - ColumnDefinition: Name, declared type and constraints of a column
        - ForeignKeyRef: Target table and column of a foreign key

    Rows:
        - Row: Fixed-width positional tuple of values

    Tables:
        - Table: Column definitions plus stored rows, with constraint checks
"""

from reldb.domain.entities.column import ColumnDefinition, ForeignKeyRef
from reldb.domain.entities.row import Row
from reldb.domain.entities.table import Table

__all__ = [
    "ColumnDefinition",
    "ForeignKeyRef",
    "Row",
    "Table",
]
