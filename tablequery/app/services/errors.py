"""Error taxonomy for workspace, ingestion and query failures.

Every error carries a human-readable message; routers surface it as the
response ``detail``.
"""


class TableQueryError(Exception):
    """Base class for all failures the service reports to callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIdentifier(TableQueryError):
    """Upload identifier does not have the expected shape."""


class WorkspaceNotFound(TableQueryError):
    """Upload identifier is well-formed but no workspace exists for it."""


class IngestionFailure(TableQueryError):
    """Raw file could not be loaded into the store."""


class EmptyQuery(TableQueryError):
    pass


class NotAReadQuery(TableQueryError):
    pass


class QueryExecutionError(TableQueryError):
    """DuckDB rejected the statement. The message is the engine's own."""


class EmptyResultSchema(TableQueryError):
    """Query produced neither columns nor rows, so there is nothing to render."""
