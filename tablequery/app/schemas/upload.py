from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ColumnMeta(CamelModel):
    name: str
    type: str


class TableSummary(CamelModel):
    columns: list[ColumnMeta]
    row_count: int


class UploadResponse(CamelModel):
    upload_id: str
    summary: TableSummary
