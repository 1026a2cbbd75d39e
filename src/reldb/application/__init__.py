"""Application layer for the relational engine.

The application layer orchestrates domain logic to fulfill use cases.

Exports:
    DatabaseEngine:
        - DatabaseEngine: Main entry point for statements and scripts
        - ScriptResult: Outcome of a fail-fast script run
        - ExecutedStatement: A completed statement and its outcome
        - split_statements: Script splitting and comment stripping
    Interpreter:
        - QueryInterpreter: Executes single statements against a catalog
        - Message: Status outcome of non-SELECT statements
        - QueryOutcome: Message or result Table
        - convert_literal: Literal to typed value conversion
"""

from reldb.application.database_engine import (
    DatabaseEngine,
    ExecutedStatement,
    ScriptResult,
    split_statements,
)
from reldb.application.interpreter import (
    JOIN_RESULT_NAME,
    SELECT_RESULT_NAME,
    Message,
    QueryInterpreter,
    QueryOutcome,
    convert_literal,
)

__all__ = [
    "DatabaseEngine",
    "ExecutedStatement",
    "ScriptResult",
    "split_statements",
    "QueryInterpreter",
    "Message",
    "QueryOutcome",
    "convert_literal",
    "SELECT_RESULT_NAME",
    "JOIN_RESULT_NAME",
]
