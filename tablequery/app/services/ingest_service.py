import logging
import os
from pathlib import Path

import duckdb

from tablequery.app.schemas.upload import ColumnMeta, TableSummary
from tablequery.app.services.errors import IngestionFailure
from tablequery.app.services.store import TABLE_NAME, quote_literal, store_connection

logger = logging.getLogger("tablequery.ingest")


def _read_summary(conn: duckdb.DuckDBPyConnection, no_columns_message: str) -> TableSummary:
    columns = [
        ColumnMeta(name=name, type=data_type)
        for name, data_type in conn.execute(
            """
            SELECT column_name, data_type
            FROM information_schema.columns
            WHERE table_name = ?
            ORDER BY ordinal_position
            """,
            [TABLE_NAME],
        ).fetchall()
    ]
    if not columns:
        raise IngestionFailure(no_columns_message)

    row_count = conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()[0]
    return TableSummary(columns=columns, row_count=int(row_count))


def _is_blank(path: str, chunk_size: int = 65_536) -> bool:
    """True if the file holds nothing but whitespace."""
    with open(path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                return True
            if chunk.strip():
                return False


def ingest_csv(raw_path: Path | str, store_path: Path | str) -> TableSummary:
    """
    Load the raw CSV into the store as `tablename`, replacing any previous copy.

    Types and delimiters are inferred from the whole file (sample_size=-1), so a
    late outlier row cannot leave a column with the wrong type.

    Raises IngestionFailure if the file cannot be parsed, yields no columns, or
    the store cannot be written.
    """
    abs_path = os.path.abspath(raw_path)
    if not os.path.isfile(abs_path):
        raise IngestionFailure(f"Raw file not found: {raw_path}")
    if _is_blank(abs_path):
        raise IngestionFailure("File is empty")

    try:
        with store_connection(store_path) as conn:
            conn.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
            conn.execute(
                f"CREATE TABLE {TABLE_NAME} AS "
                f"SELECT * FROM read_csv_auto({quote_literal(abs_path)}, sample_size=-1)"
            )
            summary = _read_summary(conn, "File contains no columns")
    except (duckdb.Error, OSError) as e:
        raise IngestionFailure(f"Could not parse file: {e}") from e

    logger.info(
        "Ingested %s: %d columns, %d rows",
        abs_path, len(summary.columns), summary.row_count,
    )
    return summary


def describe_table(store_path: Path | str) -> TableSummary:
    """Recompute the summary of an already-ingested store without reloading it."""
    if not os.path.isfile(store_path):
        raise IngestionFailure("Upload has no ingested table")

    try:
        with store_connection(store_path, read_only=True) as conn:
            return _read_summary(conn, "Upload has no ingested table")
    except duckdb.Error as e:
        raise IngestionFailure(f"Could not read table: {e}") from e
