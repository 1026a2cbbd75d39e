"""Column definitions."""

from __future__ import annotations

from dataclasses import dataclass

from reldb.domain.value_objects import DataType


@dataclass(frozen=True, slots=True)
class ForeignKeyRef:
    """Target of a foreign key: a column in another (or the same) table."""

    table: str
    column: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", self.table.strip().lower())
        object.__setattr__(self, "column", self.column.strip().lower())

    def __str__(self) -> str:
        return f"{self.table}.{self.column}"


@dataclass(frozen=True, slots=True)
class ColumnDefinition:
    """A column's name, declared type and constraints.

    Definitions are immutable, so a SELECT result may share them with the
    source table.

    Attributes:
        name: Lowercase column name
        data_type: Declared scalar type
        is_primary_key: Values must be unique and present
        foreign_key: Present values must exist in the referenced column
    """

    name: str
    data_type: DataType
    is_primary_key: bool = False
    foreign_key: ForeignKeyRef | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.strip().lower())

    def qualified(self, table_name: str) -> ColumnDefinition:
        """Unconstrained copy named ``table_name.column`` for join output."""
        return ColumnDefinition(name=f"{table_name}.{self.name}", data_type=self.data_type)

    def references(self, table_name: str) -> bool:
        """Return True if this column's foreign key targets ``table_name``."""
        return self.foreign_key is not None and self.foreign_key.table == table_name.lower()

    def __str__(self) -> str:
        info = f"{self.name} ({self.data_type.value})"
        if self.is_primary_key:
            info += " [PK]"
        if self.foreign_key is not None:
            info += f" [FK -> {self.foreign_key}]"
        return info
