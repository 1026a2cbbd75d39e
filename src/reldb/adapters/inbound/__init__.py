"""Inbound adapters for the relational engine.

Inbound adapters handle incoming requests and convert them to
internal domain operations.

Exports:
    SQL Parser:
        - SQLParser: Parser that converts statements to plans
        - LogicalPlan: Base class for all plans
        - StatementType: Statement kinds recognized by prefix
        - GLOSSARY: Supported-command help entries

The REST API lives in ``reldb.adapters.inbound.rest_api`` and is imported
from there directly.
"""

from reldb.adapters.inbound.sql_parser import (
    GLOSSARY,
    CreateTablePlan,
    DeletePlan,
    DropTablePlan,
    GlossaryEntry,
    InsertPlan,
    JoinPlan,
    LogicalPlan,
    SelectPlan,
    SQLParser,
    StatementType,
)

__all__ = [
    # SQL Parser
    "SQLParser",
    "StatementType",
    "GLOSSARY",
    "GlossaryEntry",
    # Plans
    "LogicalPlan",
    "CreateTablePlan",
    "DropTablePlan",
    "InsertPlan",
    "DeletePlan",
    "SelectPlan",
    "JoinPlan",
]
