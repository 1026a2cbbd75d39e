"""REST API adapter for the relational engine.

This module provides a FastAPI-based REST API for running scripts
against an engine.

Endpoints:
    POST /execute - Execute a ';'-separated script, stopping at the first failure
    GET /tables - Schemas of the tables in the catalog
    GET /glossary - Supported commands with examples
    GET /health - Health check

A statement that fails is reported in the response body with HTTP 200;
only malformed requests produce 4xx responses.

Usage:
    from reldb.adapters.inbound.rest_api import create_app
    from reldb.application import DatabaseEngine

    app = create_app(DatabaseEngine())
    # Run with uvicorn: uvicorn app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from reldb import __version__
from reldb.adapters.inbound.sql_parser import GLOSSARY
from reldb.application import DatabaseEngine, ExecutedStatement, ScriptResult
from reldb.domain.entities import Table


class ScriptRequest(BaseModel):
    """Request model for script execution."""

    sql: str = Field(..., description="One or more statements separated by ';'")


class StatementResponse(BaseModel):
    """Outcome of one executed statement."""

    statement: str = Field(..., description="Statement as submitted")
    message: str = Field("", description="Status message for non-SELECT statements")
    columns: list[str] = Field(default_factory=list, description="Result column names")
    rows: list[list[int | str | None]] = Field(
        default_factory=list, description="Result rows; absent values are null"
    )
    affected_rows: int = Field(0, description="Number of rows inserted or deleted")


class ErrorResponse(BaseModel):
    """Error that stopped a script."""

    kind: str = Field(..., description="Error kind, e.g. PrimaryKeyViolation")
    message: str = Field(..., description="Human-readable explanation")
    statement: str | None = Field(None, description="Statement that failed")


class ScriptResponse(BaseModel):
    """Response model for script execution."""

    success: bool = Field(..., description="Whether every statement succeeded")
    results: list[StatementResponse] = Field(
        default_factory=list, description="Statements executed before any failure"
    )
    error: ErrorResponse | None = Field(None, description="Failure that stopped the script")


class ColumnResponse(BaseModel):
    """Schema of one column."""

    name: str
    data_type: str
    primary_key: bool
    references: str | None = Field(None, description="Foreign key target as table.column")
    description: str = Field(..., description="Summary such as 'id (INT) [PK]'")


class TableResponse(BaseModel):
    """Schema and size of one table."""

    name: str
    columns: list[ColumnResponse]
    row_count: int


class GlossaryResponse(BaseModel):
    """One supported command."""

    command: str
    description: str
    example: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    tables: int = Field(..., description="Number of tables in the catalog")


def _statement_to_response(executed: ExecutedStatement) -> StatementResponse:
    """Convert an ExecutedStatement to a StatementResponse."""
    outcome = executed.outcome
    if isinstance(outcome, Table):
        return StatementResponse(
            statement=executed.statement,
            message=f"SELECT returned {outcome.row_count} row(s)",
            columns=outcome.column_names(),
            rows=[row.to_python() for row in outcome],
        )
    return StatementResponse(
        statement=executed.statement,
        message=outcome.text,
        affected_rows=outcome.affected_rows,
    )


def _script_to_response(result: ScriptResult) -> ScriptResponse:
    """Convert a ScriptResult to a ScriptResponse."""
    error = None
    if result.error is not None:
        error = ErrorResponse(
            kind=result.error.kind,
            message=str(result.error),
            statement=result.failed_statement,
        )
    return ScriptResponse(
        success=result.success,
        results=[_statement_to_response(s) for s in result.executed],
        error=error,
    )


def _table_to_response(table: Table) -> TableResponse:
    """Describe a table's schema."""
    columns = [
        ColumnResponse(
            name=column.name,
            data_type=column.data_type.value,
            primary_key=column.is_primary_key,
            references=str(column.foreign_key) if column.foreign_key else None,
            description=str(column),
        )
        for column in table.columns
    ]
    return TableResponse(name=table.name, columns=columns, row_count=table.row_count)


def create_app(engine: DatabaseEngine) -> FastAPI:
    """Create a FastAPI application for the engine.

    Args:
        engine: The engine to use.

    Returns:
        A configured FastAPI application.
    """
    app = FastAPI(
        title="reldb API",
        description="REST API for running SQL scripts against an in-memory relational engine",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=engine.config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            tables=len(engine.catalog),
        )

    @app.post("/execute", response_model=ScriptResponse, tags=["SQL"])
    async def execute_script(request: ScriptRequest) -> ScriptResponse:
        """Execute a script.

        Args:
            request: The request containing the script.

        Returns:
            Outcomes of the executed statements and the error, if any.
        """
        return _script_to_response(engine.execute_script(request.sql))

    @app.get("/tables", response_model=list[TableResponse], tags=["Catalog"])
    async def list_tables() -> list[TableResponse]:
        """Describe every table in the catalog."""
        return [_table_to_response(table) for table in engine.catalog]

    @app.get("/glossary", response_model=list[GlossaryResponse], tags=["Help"])
    async def glossary() -> list[GlossaryResponse]:
        """List the supported commands."""
        return [
            GlossaryResponse(command=e.command, description=e.description, example=e.example)
            for e in GLOSSARY
        ]

    return app


def run_server(
    engine: DatabaseEngine,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Run the REST API server.

    Args:
        engine: The engine.
        host: Host to bind to. Defaults to the configured server host.
        port: Port to bind to. Defaults to the configured server port.
    """
    import uvicorn

    server = engine.config.server
    app = create_app(engine)
    uvicorn.run(app, host=host or server.host, port=port or server.port)


if __name__ == "__main__":
    from reldb.infrastructure import (
        get_config,
        setup_logging_from_config,
        setup_metrics,
        setup_tracing,
    )

    config = get_config()
    setup_logging_from_config(config.observability)
    setup_tracing(config.observability)
    metrics = setup_metrics(port=config.server.metrics_port)
    run_server(DatabaseEngine(config=config, metrics=metrics))
