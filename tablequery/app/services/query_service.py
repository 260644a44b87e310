"""Query executor: runs one read-only statement against a workspace store.

Each call goes through the same gates: the statement guard, execution on a
fresh read-only connection (timed), then normalization of the result into a
JSON-safe payload capped at MAX_ROWS rows.
"""

import asyncio
import datetime
import logging
import math
import time
from decimal import Decimal
from pathlib import Path
from typing import Any, Sequence

import duckdb

from tablequery.app.schemas.query import QueryResult
from tablequery.app.schemas.upload import ColumnMeta
from tablequery.app.services.errors import EmptyResultSchema, QueryExecutionError
from tablequery.app.services.sql_guard import prepare_statement
from tablequery.app.services.store import store_connection

logger = logging.getLogger("tablequery.query")

MAX_ROWS = 1000

# Largest integer a JavaScript client can hold without losing precision.
MAX_SAFE_INTEGER = 2**53 - 1

NUMERIC_TYPE_TAG = "DOUBLE"
TEXT_TYPE_TAG = "VARCHAR"


def to_json_safe(value: Any) -> Any:
    """Convert a DuckDB value into something that survives a JSON round trip."""
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        if -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
            return value
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(v) for v in value]
    return str(value)


def _columns_from_first_row(rows: list[dict[str, Any]]) -> list[ColumnMeta]:
    """Guess column types from the first row when the engine gives no metadata.

    Only distinguishes numbers from everything else, so a NULL in the first
    row reports the text tag even if later values are numeric.
    """
    if not rows:
        return []
    columns = []
    for name, value in rows[0].items():
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        columns.append(ColumnMeta(name=name, type=NUMERIC_TYPE_TAG if is_number else TEXT_TYPE_TAG))
    return columns


def build_columns(
    names: Sequence[str], types: Sequence[str], rows: list[dict[str, Any]]
) -> list[ColumnMeta]:
    if names:
        return [ColumnMeta(name=name, type=type_) for name, type_ in zip(names, types)]
    columns = _columns_from_first_row(rows)
    if not columns:
        raise EmptyResultSchema("Query returned no columns")
    return columns


def wrap_statement(statement: str, limit: int = MAX_ROWS + 1) -> str:
    # Newlines keep a trailing line comment from swallowing the closing paren.
    return f"SELECT * FROM (\n{statement}\n) AS user_query LIMIT {limit}"


def run_query(store_path: Path | str, sql: str) -> QueryResult:
    """
    Validate, execute and normalize one user statement.

    Raises EmptyQuery, NotAReadQuery, QueryExecutionError or EmptyResultSchema.
    """
    statement = prepare_statement(sql)
    wrapped = wrap_statement(statement)

    try:
        with store_connection(store_path, read_only=True) as conn:
            t0 = time.perf_counter()
            relation = conn.sql(wrapped)
            raw_rows = relation.fetchall()
            elapsed = time.perf_counter() - t0
            names = list(relation.columns)
            types = [str(t) for t in relation.types]
    except duckdb.Error as e:
        logger.warning("Query failed: %s (sql: %s)", e, statement)
        raise QueryExecutionError(str(e)) from e

    truncated = len(raw_rows) > MAX_ROWS
    if truncated:
        raw_rows = raw_rows[:MAX_ROWS]

    rows = [
        {name: to_json_safe(value) for name, value in zip(names, row)}
        for row in raw_rows
    ]
    columns = build_columns(names, types, rows)
    execution_time_ms = int(round(elapsed * 1000))

    logger.debug(
        "Query executed in %d ms, %d rows returned%s",
        execution_time_ms, len(rows), " (truncated)" if truncated else "",
    )
    return QueryResult(
        columns=columns,
        rows=rows,
        row_count=len(rows),
        truncated=truncated,
        execution_time_ms=execution_time_ms,
    )


async def run_query_async(store_path: Path | str, sql: str) -> QueryResult:
    """Run the query in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(run_query, store_path, sql)
