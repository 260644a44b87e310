import logging
import re
import uuid
from dataclasses import dataclass
from pathlib import Path

from tablequery.app.services.errors import InvalidIdentifier, WorkspaceNotFound

logger = logging.getLogger("tablequery.workspace")

RAW_FILENAME = "source.csv"
STORE_FILENAME = "data.duckdb"

_UPLOAD_ID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
)


@dataclass(frozen=True)
class WorkspacePaths:
    upload_id: str
    workspace_dir: Path
    raw_path: Path
    store_path: Path


def is_valid_upload_id(upload_id: str) -> bool:
    return isinstance(upload_id, str) and _UPLOAD_ID_PATTERN.fullmatch(upload_id) is not None


class WorkspaceManager:
    """Maps upload identifiers to isolated directories under a single root.

    Each workspace directory holds exactly two files with fixed names: the raw
    upload (``source.csv``) and the DuckDB store (``data.duckdb``).
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _paths(self, upload_id: str) -> WorkspacePaths:
        workspace_dir = self.root / upload_id
        return WorkspacePaths(
            upload_id=upload_id,
            workspace_dir=workspace_dir,
            raw_path=workspace_dir / RAW_FILENAME,
            store_path=workspace_dir / STORE_FILENAME,
        )

    def create_workspace(self) -> WorkspacePaths:
        """Allocate a fresh workspace directory and return its paths."""
        self._ensure_root()
        upload_id = str(uuid.uuid4())
        paths = self._paths(upload_id)
        paths.workspace_dir.mkdir(parents=True, exist_ok=False)
        logger.debug("Created workspace %s", upload_id)
        return paths

    def resolve_workspace(self, upload_id: str) -> WorkspacePaths:
        """Look up an existing workspace.

        The identifier shape is checked before touching the filesystem so a
        crafted id can never escape the root.

        Raises InvalidIdentifier or WorkspaceNotFound.
        """
        if not is_valid_upload_id(upload_id):
            logger.warning("Rejected malformed upload id: %r", upload_id)
            raise InvalidIdentifier("Invalid upload id")

        paths = self._paths(upload_id)
        if not paths.workspace_dir.is_dir():
            raise WorkspaceNotFound("Upload not found")
        return paths
