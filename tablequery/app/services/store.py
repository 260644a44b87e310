"""Scoped access to a workspace's DuckDB store."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import duckdb

TABLE_NAME = "tablename"


@contextmanager
def store_connection(store_path: Path | str, read_only: bool = False) -> Iterator[duckdb.DuckDBPyConnection]:
    """Open a fresh connection to the store and always close it on exit."""
    conn = duckdb.connect(str(store_path), read_only=read_only)
    try:
        yield conn
    finally:
        conn.close()


def quote_literal(value: str) -> str:
    """Render a string as a SQL literal, doubling embedded single quotes."""
    return "'" + value.replace("'", "''") + "'"
