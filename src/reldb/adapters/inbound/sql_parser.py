"""SQL parser for the engine's narrow dialect.

This module turns one statement of the supported dialect into a plan that
the interpreter can execute. Statements are normalized before matching:
whitespace runs collapse to a single space, the statement is trimmed and
lower-cased. By default string literal contents are lower-cased as well;
``fold_literal_case=False`` limits lower-casing to text outside
single-quoted literals.

Dispatch is by leading keyword prefix, and every statement form must match
its pattern in full.

Supported statements:
    - CREATE TABLE name (col TYPE [PRIMARY KEY] [REFERENCES table(col)], ...)
    - DROP TABLE name
    - INSERT INTO name (col, ...) VALUES (val, ...)
    - DELETE FROM name WHERE col = value
    - SELECT * | col, ... FROM name
    - SELECT ... FROM t1 JOIN t2 ON a.col = b.col

Types are INT and STRING only.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from reldb.domain.entities import ColumnDefinition, ForeignKeyRef
from reldb.domain.errors import (
    ArityMismatchError,
    InvalidForeignKeySyntax,
    InvalidSyntaxError,
    UnsupportedStatementError,
    UnsupportedTypeError,
)
from reldb.domain.value_objects import DataType

_IDENT = r"[a-z0-9_]+"

_WHITESPACE = re.compile(r"\s+")
_QUOTED_LITERAL = re.compile(r"('[^']*')")

_CREATE_TABLE = re.compile(rf"create table ({_IDENT}) \((.+)\)")
_DROP_TABLE = re.compile(rf"drop table ({_IDENT})")
_INSERT = re.compile(rf"insert into ({_IDENT}) \((.+)\) values \((.+)\)")
_DELETE = re.compile(rf"delete from ({_IDENT}) where ({_IDENT}) = (.+)")
_SELECT_JOIN = re.compile(
    rf"select (.+) from ({_IDENT}) join ({_IDENT}) "
    rf"on ({_IDENT})\.({_IDENT}) = ({_IDENT})\.({_IDENT})"
)
_SELECT = re.compile(rf"select (.+) from ({_IDENT})")

# Commas inside a trailing "(...)" group belong to a REFERENCES clause
_COLUMN_SEPARATOR = re.compile(r",(?![^(]*\))")
_PRIMARY_KEY = re.compile(r"\bprimary key\b")
_REFERENCES_KEYWORD = re.compile(r"\breferences\b")
_REFERENCES_CLAUSE = re.compile(rf"references ({_IDENT})\s*\(({_IDENT})\)")


class StatementType(Enum):
    """Types of SQL statements."""

    CREATE_TABLE = "create_table"
    DROP_TABLE = "drop_table"
    INSERT = "insert"
    DELETE = "delete"
    SELECT = "select"
    UNKNOWN = "unknown"


_PREFIXES: tuple[tuple[str, StatementType], ...] = (
    ("create table", StatementType.CREATE_TABLE),
    ("drop table", StatementType.DROP_TABLE),
    ("insert into", StatementType.INSERT),
    ("delete from", StatementType.DELETE),
    ("select", StatementType.SELECT),
)


@dataclass(frozen=True)
class GlossaryEntry:
    """One supported command, for help output."""

    command: str
    description: str
    example: str


GLOSSARY: tuple[GlossaryEntry, ...] = (
    GlossaryEntry(
        "SELECT",
        "Query data from a table, or from two tables joined on equal column values.",
        "SELECT * FROM users JOIN cities ON users.city_id = cities.id;",
    ),
    GlossaryEntry(
        "CREATE TABLE",
        "Create a table with INT or STRING columns, optional PRIMARY KEY and REFERENCES.",
        "CREATE TABLE users (id INT PRIMARY KEY, city_id INT REFERENCES cities(id));",
    ),
    GlossaryEntry(
        "INSERT INTO",
        "Add one row; unlisted columns are left empty.",
        "INSERT INTO users (id, name) VALUES (1, 'Alice');",
    ),
    GlossaryEntry(
        "DELETE FROM",
        "Remove the rows whose column equals a value.",
        "DELETE FROM users WHERE id = 1;",
    ),
    GlossaryEntry(
        "DROP TABLE",
        "Remove a table that no foreign key references.",
        "DROP TABLE users;",
    ),
)


# Plans


@dataclass
class LogicalPlan(ABC):
    """Base class for statement plans."""

    @property
    @abstractmethod
    def statement_type(self) -> StatementType:
        pass

    @abstractmethod
    def __str__(self) -> str:
        pass


@dataclass
class CreateTablePlan(LogicalPlan):
    """Create a new table."""

    table_name: str
    columns: list[ColumnDefinition]

    @property
    def statement_type(self) -> StatementType:
        return StatementType.CREATE_TABLE

    def __str__(self) -> str:
        cols = ", ".join(str(c) for c in self.columns)
        return f"CreateTable({self.table_name}, [{cols}])"


@dataclass
class DropTablePlan(LogicalPlan):
    """Drop a table."""

    table_name: str

    @property
    def statement_type(self) -> StatementType:
        return StatementType.DROP_TABLE

    def __str__(self) -> str:
        return f"DropTable({self.table_name})"


@dataclass
class InsertPlan(LogicalPlan):
    """Insert one row.

    Literals are kept as written; they are converted against the target
    column's declared type at execution time.
    """

    table_name: str
    columns: list[str]
    literals: list[str]

    @property
    def statement_type(self) -> StatementType:
        return StatementType.INSERT

    def __str__(self) -> str:
        return f"Insert({self.table_name}, cols={self.columns}, values={self.literals})"


@dataclass
class DeletePlan(LogicalPlan):
    """Delete the rows where ``column_name`` equals ``literal``."""

    table_name: str
    column_name: str
    literal: str

    @property
    def statement_type(self) -> StatementType:
        return StatementType.DELETE

    def __str__(self) -> str:
        return f"Delete({self.table_name} WHERE {self.column_name} = {self.literal})"


@dataclass
class SelectPlan(LogicalPlan):
    """Select from one table. ``columns`` is None for ``*``."""

    table_name: str
    columns: list[str] | None = None

    @property
    def statement_type(self) -> StatementType:
        return StatementType.SELECT

    def __str__(self) -> str:
        cols = "*" if self.columns is None else ", ".join(self.columns)
        return f"Select({cols})\n  -> TableScan({self.table_name})"


@dataclass
class JoinPlan(LogicalPlan):
    """Nested-loop equality join of two tables.

    ``projection`` is recorded but not applied: the join always returns
    every column of both tables.
    """

    left_table: str
    right_table: str
    left_column: str
    right_column: str
    projection: list[str] = field(default_factory=list)

    @property
    def statement_type(self) -> StatementType:
        return StatementType.SELECT

    def __str__(self) -> str:
        return (
            f"NestedLoopJoin({self.left_table}.{self.left_column} = "
            f"{self.right_table}.{self.right_column})\n"
            f"  -> TableScan({self.left_table})\n"
            f"  -> TableScan({self.right_table})"
        )


class SQLParser:
    """Regex-driven parser for the supported dialect.

    Example:
        >>> parser = SQLParser()
        >>> plan = parser.parse("SELECT id, name FROM users")
        >>> print(plan)
        Select(id, name)
          -> TableScan(users)
    """

    def __init__(self, fold_literal_case: bool = True, max_statement_length: int = 65536) -> None:
        """Initialize the parser.

        Args:
            fold_literal_case: Lower-case string literal contents too.
            max_statement_length: Longest statement accepted, in characters.
        """
        self._fold_literal_case = fold_literal_case
        self._max_statement_length = max_statement_length

    def normalize(self, sql: str) -> str:
        """Collapse whitespace, trim and lower-case a statement."""
        collapsed = _WHITESPACE.sub(" ", sql.strip())
        if self._fold_literal_case:
            return collapsed.lower()
        parts = _QUOTED_LITERAL.split(collapsed)
        return "".join(part if part.startswith("'") else part.lower() for part in parts)

    def classify(self, sql: str) -> StatementType:
        """Statement type by leading keyword, UNKNOWN if unsupported."""
        statement = _WHITESPACE.sub(" ", sql.strip()).lower()
        for prefix, statement_type in _PREFIXES:
            if statement.startswith(prefix):
                return statement_type
        return StatementType.UNKNOWN

    def parse(self, sql: str) -> LogicalPlan:
        """Parse one statement into a plan.

        Args:
            sql: A single statement, without a trailing semicolon.

        Returns:
            The plan for the statement.

        Raises:
            UnsupportedStatementError: If the leading keyword is not supported.
            InvalidSyntaxError: If the statement does not match its grammar.
            UnsupportedTypeError: If a column type is not INT or STRING.
            InvalidForeignKeySyntax: If a REFERENCES clause is malformed.
            ArityMismatchError: If INSERT lists differ in length.
        """
        if len(sql) > self._max_statement_length:
            raise InvalidSyntaxError(
                f"Statement exceeds the maximum length of {self._max_statement_length} characters."
            )

        statement = self.normalize(sql)
        statement_type = self.classify(statement)

        if statement_type is StatementType.CREATE_TABLE:
            return self._parse_create_table(statement)
        elif statement_type is StatementType.DROP_TABLE:
            return self._parse_drop_table(statement)
        elif statement_type is StatementType.INSERT:
            return self._parse_insert(statement)
        elif statement_type is StatementType.DELETE:
            return self._parse_delete(statement)
        elif statement_type is StatementType.SELECT:
            return self._parse_select(statement)

        raise UnsupportedStatementError(f"Invalid or unsupported SQL statement: '{statement}'")

    def _parse_create_table(self, statement: str) -> CreateTablePlan:
        match = _CREATE_TABLE.fullmatch(statement)
        if match is None:
            raise InvalidSyntaxError("Invalid CREATE TABLE syntax.")

        table_name, body = match.group(1), match.group(2)
        columns = [self._parse_column_def(d.strip()) for d in _COLUMN_SEPARATOR.split(body)]
        return CreateTablePlan(table_name=table_name, columns=columns)

    def _parse_column_def(self, definition: str) -> ColumnDefinition:
        parts = definition.split(" ")
        if len(parts) < 2 or not parts[0]:
            raise InvalidSyntaxError(f"Invalid column definition '{definition}'.")

        name, type_token = parts[0], parts[1]
        data_type = DataType.from_token(type_token)
        if data_type is None:
            raise UnsupportedTypeError(
                f"Data type '{type_token.upper()}' is not supported. Use INT or STRING."
            )

        foreign_key = None
        if _REFERENCES_KEYWORD.search(definition):
            fk_match = _REFERENCES_CLAUSE.search(definition)
            if fk_match is None:
                raise InvalidForeignKeySyntax(f"Invalid FOREIGN KEY syntax for column '{name}'.")
            foreign_key = ForeignKeyRef(table=fk_match.group(1), column=fk_match.group(2))

        return ColumnDefinition(
            name=name,
            data_type=data_type,
            is_primary_key=_PRIMARY_KEY.search(definition) is not None,
            foreign_key=foreign_key,
        )

    def _parse_drop_table(self, statement: str) -> DropTablePlan:
        match = _DROP_TABLE.fullmatch(statement)
        if match is None:
            raise InvalidSyntaxError("Invalid DROP TABLE syntax. Use: DROP TABLE table_name")
        return DropTablePlan(table_name=match.group(1))

    def _parse_insert(self, statement: str) -> InsertPlan:
        match = _INSERT.fullmatch(statement)
        if match is None:
            raise InvalidSyntaxError("Invalid INSERT INTO syntax.")

        columns = [c.strip() for c in match.group(2).split(",")]
        literals = [v.strip() for v in match.group(3).split(",")]
        if len(columns) != len(literals):
            raise ArityMismatchError(
                f"Column count ({len(columns)}) does not match value count ({len(literals)})."
            )
        return InsertPlan(table_name=match.group(1), columns=columns, literals=literals)

    def _parse_delete(self, statement: str) -> DeletePlan:
        match = _DELETE.fullmatch(statement)
        if match is None:
            raise InvalidSyntaxError(
                "Invalid DELETE FROM syntax. Use: DELETE FROM table WHERE column = value"
            )
        return DeletePlan(
            table_name=match.group(1),
            column_name=match.group(2),
            literal=match.group(3).strip(),
        )

    def _parse_select(self, statement: str) -> SelectPlan | JoinPlan:
        join = _SELECT_JOIN.fullmatch(statement)
        if join is not None:
            # ON qualifiers are not checked against the table names
            return JoinPlan(
                left_table=join.group(2),
                right_table=join.group(3),
                left_column=join.group(5),
                right_column=join.group(7),
                projection=[c.strip() for c in join.group(1).split(",")],
            )

        simple = _SELECT.fullmatch(statement)
        if simple is None:
            raise InvalidSyntaxError("Invalid SELECT syntax.")

        projection = simple.group(1).strip()
        columns = None if projection == "*" else [c.strip() for c in projection.split(",")]
        return SelectPlan(table_name=simple.group(2), columns=columns)
