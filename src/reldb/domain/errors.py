"""Error hierarchy for the relational engine.

Every failure the engine reports is a subclass of ``EngineError``. Errors
are recoverable at the statement boundary: a statement that raises leaves
the catalog exactly as it found it, because all validation runs before any
storage is mutated.

Hierarchy:
    EngineError
    ├── UnsupportedStatementError
    ├── InvalidSyntaxError
    │   └── InvalidForeignKeySyntax
    ├── UnsupportedTypeError
    ├── DuplicateTableError
    ├── TableNotFoundError
    ├── ColumnNotFoundError
    ├── ArityMismatchError
    ├── TypeConversionError
    └── ConstraintError
        ├── PrimaryKeyViolation
        ├── ForeignKeyViolation
        ├── ReferencedTableMissing
        └── ReferentialIntegrityError
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all engine errors."""

    @property
    def kind(self) -> str:
        """Stable name of the error kind, used in responses and metrics."""
        return type(self).__name__


class UnsupportedStatementError(EngineError):
    """Statement does not start with a supported keyword."""

    pass


class InvalidSyntaxError(EngineError):
    """Statement keyword is supported but the statement does not match its grammar."""

    pass


class InvalidForeignKeySyntax(InvalidSyntaxError):
    """A REFERENCES clause is not of the form ``references table(column)``."""

    pass


class UnsupportedTypeError(EngineError):
    """Column type is neither INT nor STRING."""

    pass


class DuplicateTableError(EngineError):
    """A table with the same name is already registered."""

    pass


class TableNotFoundError(EngineError):
    """Named table is not registered in the catalog."""

    pass


class ColumnNotFoundError(EngineError):
    """Named column does not exist in the table."""

    pass


class ArityMismatchError(EngineError):
    """Column list and value list (or row and schema) differ in length."""

    pass


class TypeConversionError(EngineError):
    """Literal cannot be converted to the column's declared type."""

    pass


class ConstraintError(EngineError):
    """Base class for integrity constraint failures."""

    pass


class PrimaryKeyViolation(ConstraintError):
    """Primary key value is absent or already present in the table."""

    pass


class ForeignKeyViolation(ConstraintError):
    """Foreign key value matches no value in the referenced column."""

    pass


class ReferencedTableMissing(ConstraintError):
    """Table named by a foreign key no longer exists."""

    pass


class ReferentialIntegrityError(ConstraintError):
    """Table cannot be dropped while a foreign key references it."""

    pass
