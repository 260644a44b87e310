from functools import lru_cache
from pathlib import Path

from tablequery.app.config import settings
from tablequery.app.services.workspace_service import WorkspaceManager


@lru_cache
def get_workspace_manager() -> WorkspaceManager:
    """Workspace manager rooted at the configured DATA_DIR. Overridden in tests."""
    return WorkspaceManager(Path(settings.DATA_DIR).resolve())
