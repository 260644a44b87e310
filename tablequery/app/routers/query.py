from fastapi import APIRouter, Depends, HTTPException, status

from tablequery.app.dependencies.workspace import get_workspace_manager
from tablequery.app.schemas.query import QueryRequest, QueryResult
from tablequery.app.services.errors import (
    InvalidIdentifier,
    TableQueryError,
    WorkspaceNotFound,
)
from tablequery.app.services.query_service import run_query_async
from tablequery.app.services.workspace_service import WorkspaceManager

router = APIRouter()


@router.post("/query", response_model=QueryResult)
async def query_upload(
    body: QueryRequest,
    workspaces: WorkspaceManager = Depends(get_workspace_manager),
):
    if not body.upload_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="uploadId is required")

    try:
        workspace = workspaces.resolve_workspace(body.upload_id)
    except (InvalidIdentifier, WorkspaceNotFound) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    # EmptyQuery, NotAReadQuery, QueryExecutionError and EmptyResultSchema are all
    # problems with the submitted SQL.
    try:
        return await run_query_async(workspace.store_path, body.sql)
    except TableQueryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
