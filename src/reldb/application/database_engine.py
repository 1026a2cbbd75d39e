"""Database Engine - Unified entry point for the relational engine.

This module provides the DatabaseEngine class that wires the catalog,
parser and interpreter together with logging, metrics and tracing, and
runs multi-statement scripts.

Usage:
    from reldb.application import DatabaseEngine

    engine = DatabaseEngine()

    engine.execute("CREATE TABLE users (id INT PRIMARY KEY, name STRING)")
    engine.execute("INSERT INTO users (id, name) VALUES (1, 'Alice')")
    result = engine.execute("SELECT * FROM users")

    script = engine.execute_script(\"\"\"
        INSERT INTO users (id, name) VALUES (2, 'Bob');
        INSERT INTO users (id, name) VALUES (2, 'Carol'); -- fails, stops here
        INSERT INTO users (id, name) VALUES (3, 'Dave');
    \"\"\")
    assert not script.success

Execution is single-threaded and synchronous. The engine performs no
locking; callers sharing one engine across threads must serialize access.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field

from reldb.adapters.inbound.sql_parser import SQLParser, StatementType
from reldb.application.interpreter import Message, QueryInterpreter, QueryOutcome
from reldb.domain.errors import ConstraintError, EngineError
from reldb.domain.services import Catalog
from reldb.infrastructure.config import Config, get_config
from reldb.infrastructure.logging import get_logger
from reldb.infrastructure.metrics import MetricsRegistry, get_metrics
from reldb.infrastructure.tracing import script_span, statement_span

_LINE_COMMENT = re.compile(r"--.*")


def split_statements(script: str) -> list[str]:
    """Split a script on ``;`` into executable statements.

    ``--`` comments run to the end of their line and are removed, pieces
    are trimmed, and empty pieces are dropped.
    """
    statements = []
    for piece in script.split(";"):
        statement = _LINE_COMMENT.sub("", piece).strip()
        if statement:
            statements.append(statement)
    return statements


@dataclass(frozen=True)
class ExecutedStatement:
    """A statement from a script together with its outcome."""

    statement: str
    outcome: QueryOutcome


@dataclass
class ScriptResult:
    """Result of running a script.

    ``executed`` holds every statement that completed, in order. When a
    statement fails, ``error`` and ``failed_statement`` describe it and the
    remaining statements are not run.
    """

    executed: list[ExecutedStatement] = field(default_factory=list)
    error: EngineError | None = None
    failed_statement: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def last_outcome(self) -> QueryOutcome | None:
        if not self.executed:
            return None
        return self.executed[-1].outcome


class DatabaseEngine:
    """Main entry point that executes statements against one catalog.

    Each engine owns its catalog. Pass an existing catalog to share tables
    between an engine and other collaborators (tests, for example).
    """

    def __init__(
        self,
        config: Config | None = None,
        catalog: Catalog | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Engine configuration. Uses the global config if None.
            catalog: Catalog to operate on. A fresh one is created if None.
            metrics: Metrics registry. Uses the global registry if None.
        """
        self._config = config if config is not None else get_config()
        self._catalog = catalog if catalog is not None else Catalog()
        self._metrics = metrics if metrics is not None else get_metrics()

        self._parser = SQLParser(
            fold_literal_case=self._config.engine.fold_literal_case,
            max_statement_length=self._config.engine.max_statement_length,
        )
        self._interpreter = QueryInterpreter(self._catalog, self._parser)
        self._logger = get_logger(__name__)

        # Engines sharing a registry add up; the gauge is never reset
        self._metrics.tables.inc(len(self._catalog))

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def config(self) -> Config:
        return self._config

    def execute(self, sql: str) -> QueryOutcome:
        """Execute statement text and return the outcome of its last statement.

        The text goes through ``split_statements``, so a trailing ``;`` and
        ``--`` comments are accepted. When it holds several statements they
        run in order and the first failure is raised; statements before it
        stay applied.

        Args:
            sql: One or more statements separated by ``;``.

        Returns:
            A Message for CREATE/DROP/INSERT/DELETE, a result Table for SELECT.
            Text with no statements yields a "No statements executed." Message.

        Raises:
            EngineError: If a statement fails. That statement changes nothing.
        """
        outcome: QueryOutcome = Message("No statements executed.")
        for statement in split_statements(sql):
            outcome = self._execute_statement(statement)
        return outcome

    def execute_script(self, script: str) -> ScriptResult:
        """Execute a ``;``-separated script, stopping at the first failure.

        Unlike ``execute``, failures are captured in the result instead of
        raised, together with every statement that completed before them.

        Args:
            script: Statements separated by ``;``, possibly with ``--`` comments.

        Returns:
            The executed statements and, if one failed, its error.
        """
        statements = split_statements(script)
        result = ScriptResult()
        with script_span(len(statements)) as span:
            for statement in statements:
                try:
                    outcome = self._execute_statement(statement)
                except EngineError as e:
                    result.error = e
                    result.failed_statement = statement
                    span.set_attribute("reldb.error", e.kind)
                    break
                result.executed.append(ExecutedStatement(statement=statement, outcome=outcome))

        status = "completed" if result.success else "aborted"
        self._metrics.scripts_total.labels(status=status).inc()
        self._logger.info(
            f"script_{status}",
            executed=len(result.executed),
            error=result.error.kind if result.error else None,
        )
        return result

    def _execute_statement(self, statement: str) -> QueryOutcome:
        statement_type = self._parser.classify(statement)
        label = statement_type.value

        with statement_span(label):
            start = time.perf_counter()
            try:
                outcome = self._interpreter.execute(statement)
            except EngineError as e:
                self._metrics.statements_total.labels(statement_type=label, status="error").inc()
                if isinstance(e, ConstraintError):
                    self._metrics.constraint_violations_total.labels(kind=e.kind).inc()
                self._logger.warning(
                    "statement_failed",
                    statement_type=label,
                    error=e.kind,
                    detail=str(e),
                )
                raise
            finally:
                self._metrics.statement_latency_seconds.labels(statement_type=label).observe(
                    time.perf_counter() - start
                )

        self._record_success(statement_type, outcome)
        return outcome

    def _record_success(self, statement_type: StatementType, outcome: QueryOutcome) -> None:
        label = statement_type.value
        self._metrics.statements_total.labels(statement_type=label, status="success").inc()

        if statement_type is StatementType.INSERT:
            self._metrics.rows_inserted_total.inc()
        elif statement_type is StatementType.DELETE and isinstance(outcome, Message):
            self._metrics.rows_deleted_total.inc(outcome.affected_rows)
        elif statement_type is StatementType.CREATE_TABLE:
            self._metrics.tables.inc()
        elif statement_type is StatementType.DROP_TABLE:
            self._metrics.tables.dec()

        self._logger.info(
            "statement_executed",
            statement_type=label,
            result=str(outcome) if isinstance(outcome, Message) else f"{outcome.row_count} rows",
        )
