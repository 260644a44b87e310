import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from tablequery.app.config import settings
from tablequery.app.dependencies.workspace import get_workspace_manager
from tablequery.app.schemas.upload import UploadResponse
from tablequery.app.services.errors import (
    IngestionFailure,
    InvalidIdentifier,
    WorkspaceNotFound,
)
from tablequery.app.services.ingest_service import describe_table, ingest_csv
from tablequery.app.services.workspace_service import WorkspaceManager

logger = logging.getLogger("tablequery.routes")

router = APIRouter()


def _save_raw_file(upload: UploadFile, destination) -> int:
    """Stream the upload to disk in chunks. Returns bytes written."""
    written = 0
    with open(destination, "wb") as out:
        while True:
            chunk = upload.file.read(settings.UPLOAD_CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > settings.MAX_UPLOAD_SIZE:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="File exceeds 1 GB size limit",
                )
            out.write(chunk)
    return written


@router.post("/upload", response_model=UploadResponse)
def upload_file(
    file: list[UploadFile] | None = File(None),
    workspaces: WorkspaceManager = Depends(get_workspace_manager),
):
    if not file:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")
    # Extra parts under the same field are ignored.
    upload = file[0]

    workspace = workspaces.create_workspace()
    size = _save_raw_file(upload, workspace.raw_path)
    if size == 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File is empty")

    try:
        summary = ingest_csv(workspace.raw_path, workspace.store_path)
    except IngestionFailure as e:
        logger.warning("Upload %s failed to ingest: %s", workspace.upload_id, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to ingest CSV: {e}",
        )

    logger.info("Upload %s ingested (%s)", workspace.upload_id, upload.filename or "unnamed")
    return UploadResponse(upload_id=workspace.upload_id, summary=summary)


@router.get("/uploads/{upload_id}", response_model=UploadResponse)
def get_upload(
    upload_id: str,
    workspaces: WorkspaceManager = Depends(get_workspace_manager),
):
    try:
        workspace = workspaces.resolve_workspace(upload_id)
    except (InvalidIdentifier, WorkspaceNotFound) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    try:
        summary = describe_table(workspace.store_path)
    except IngestionFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return UploadResponse(upload_id=workspace.upload_id, summary=summary)
