"""Query interpreter.

Executes parsed plans against a catalog. The interpreter keeps no state
of its own between calls; the catalog it was constructed with is the only
durable state, and only CREATE, DROP, INSERT and DELETE mutate it.

SELECT results are fresh, unregistered tables. A plain SELECT reuses the
source's column definitions (they are immutable); a JOIN builds new
definitions qualified as ``table.column`` for every column of both sides.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from reldb.adapters.inbound.sql_parser import (
    CreateTablePlan,
    DeletePlan,
    DropTablePlan,
    InsertPlan,
    JoinPlan,
    LogicalPlan,
    SelectPlan,
    SQLParser,
)
from reldb.domain.entities import ColumnDefinition, Row, Table
from reldb.domain.errors import ColumnNotFoundError, EngineError, TypeConversionError
from reldb.domain.services import Catalog
from reldb.domain.value_objects import (
    INT64_MAX,
    INT64_MIN,
    DataType,
    IntegerValue,
    TextValue,
    Value,
    values_match,
)

SELECT_RESULT_NAME = "select_result"
JOIN_RESULT_NAME = "join_result"

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
# Digits in INT64_MIN, the longest value in range
_MAX_INTEGER_DIGITS = 19


@dataclass(frozen=True)
class Message:
    """Status returned by statements that do not produce rows."""

    text: str
    affected_rows: int = 0

    def __str__(self) -> str:
        return self.text


QueryOutcome = Union[Message, Table]


def convert_literal(column: ColumnDefinition, literal: str) -> Value:
    """Convert a literal as written in a statement to the column's type.

    INT columns take an optionally signed decimal integer in the 64-bit
    range. STRING columns take the literal with one leading and one
    trailing single quote removed when present; there is no escaping.

    Raises:
        TypeConversionError: If an INT literal is not a valid integer.
    """
    if column.data_type is DataType.INT:
        digits = literal.lstrip("+-").lstrip("0")
        if _INTEGER_LITERAL.fullmatch(literal) and len(digits) <= _MAX_INTEGER_DIGITS:
            number = int(digits or "0")
            if literal.startswith("-"):
                number = -number
            if INT64_MIN <= number <= INT64_MAX:
                return IntegerValue(number)
        raise TypeConversionError(
            f"Type error: value '{literal}' is not an INT for column '{column.name}'."
        )

    text = literal
    if text.startswith("'"):
        text = text[1:]
    if text.endswith("'"):
        text = text[:-1]
    return TextValue(text)


class QueryInterpreter:
    """Parses single statements and runs them against a catalog.

    Example:
        >>> interpreter = QueryInterpreter(Catalog())
        >>> interpreter.execute("CREATE TABLE t (id INT PRIMARY KEY)")
        Message(text='Table created successfully.', affected_rows=0)
    """

    def __init__(self, catalog: Catalog, parser: SQLParser | None = None) -> None:
        self._catalog = catalog
        self._parser = parser if parser is not None else SQLParser()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def parser(self) -> SQLParser:
        return self._parser

    def execute(self, sql: str) -> QueryOutcome:
        """Parse and execute one statement.

        Returns:
            A Message for CREATE/DROP/INSERT/DELETE, a result Table for SELECT.

        Raises:
            EngineError: If parsing, validation or execution fails.
        """
        return self.execute_plan(self._parser.parse(sql))

    def execute_plan(self, plan: LogicalPlan) -> QueryOutcome:
        """Execute an already-parsed plan."""
        if isinstance(plan, CreateTablePlan):
            return self._execute_create_table(plan)
        elif isinstance(plan, DropTablePlan):
            return self._execute_drop_table(plan)
        elif isinstance(plan, InsertPlan):
            return self._execute_insert(plan)
        elif isinstance(plan, DeletePlan):
            return self._execute_delete(plan)
        elif isinstance(plan, JoinPlan):
            return self._execute_join(plan)
        elif isinstance(plan, SelectPlan):
            return self._execute_select(plan)
        raise EngineError(f"Unsupported plan type: {type(plan).__name__}")

    def _execute_create_table(self, plan: CreateTablePlan) -> Message:
        self._catalog.create_table(Table(plan.table_name, plan.columns))
        return Message("Table created successfully.")

    def _execute_drop_table(self, plan: DropTablePlan) -> Message:
        self._catalog.drop_table(plan.table_name)
        return Message("Table dropped successfully.")

    def _execute_insert(self, plan: InsertPlan) -> Message:
        table = self._catalog.require_table(plan.table_name)

        row = Row(table.column_count)
        for column_name, literal in zip(plan.columns, plan.literals):
            index = self._resolve_column(table, column_name)
            row[index] = convert_literal(table.column_at(index), literal)

        table.insert_row(row, self._catalog)
        return Message("Row inserted successfully.", affected_rows=1)

    def _execute_delete(self, plan: DeletePlan) -> Message:
        table = self._catalog.require_table(plan.table_name)
        index = self._resolve_column(table, plan.column_name)
        value = convert_literal(table.column_at(index), plan.literal)

        removed = table.delete_rows(plan.column_name, value)
        return Message(f"DELETE executed successfully. Rows affected: {removed}", affected_rows=removed)

    def _execute_select(self, plan: SelectPlan) -> Table:
        source = self._catalog.require_table(plan.table_name)

        if plan.columns is None:
            return Table.from_result(
                SELECT_RESULT_NAME, source.columns, (row.copy() for row in source)
            )

        indices = [self._resolve_column(source, name) for name in plan.columns]
        return Table.from_result(
            SELECT_RESULT_NAME,
            [source.column_at(i) for i in indices],
            (row.project(indices) for row in source),
        )

    def _execute_join(self, plan: JoinPlan) -> Table:
        left = self._catalog.require_table(plan.left_table)
        right = self._catalog.require_table(plan.right_table)
        left_index = self._resolve_column(left, plan.left_column)
        right_index = self._resolve_column(right, plan.right_column)

        columns = [c.qualified(left.name) for c in left.columns]
        columns += [c.qualified(right.name) for c in right.columns]

        rows = [
            left_row.concat(right_row)
            for left_row in left
            for right_row in right
            if values_match(left_row[left_index], right_row[right_index])
        ]
        return Table.from_result(JOIN_RESULT_NAME, columns, rows)

    @staticmethod
    def _resolve_column(table: Table, name: str) -> int:
        index = table.column_index(name)
        if index is None:
            raise ColumnNotFoundError(
                f"Column '{name.strip().lower()}' not found in table '{table.name}'."
            )
        return index
