from typing import Any

from pydantic import field_validator

from tablequery.app.schemas.upload import CamelModel, ColumnMeta


class QueryRequest(CamelModel):
    upload_id: str = ""
    sql: str = ""

    @field_validator("upload_id")
    @classmethod
    def strip_upload_id(cls, value: str) -> str:
        return value.strip()


class QueryResult(CamelModel):
    columns: list[ColumnMeta]
    rows: list[dict[str, Any]]
    row_count: int
    truncated: bool
    execution_time_ms: int
