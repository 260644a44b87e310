"""Shared fixtures for workspace, ingestion, query and route tests."""

import csv

import pytest
from fastapi.testclient import TestClient

from tablequery.app.dependencies.workspace import get_workspace_manager
from tablequery.app.services.ingest_service import ingest_csv
from tablequery.app.services.workspace_service import WorkspaceManager
from tablequery.main import app


def write_csv(path, header, rows):
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)
    return path


@pytest.fixture
def make_csv(tmp_path):
    """Factory writing a CSV under tmp_path."""
    def _make(name, header, rows):
        return write_csv(tmp_path / name, header, rows)
    return _make


@pytest.fixture
def uploads_root(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def workspace_manager(uploads_root):
    return WorkspaceManager(uploads_root)


@pytest.fixture
def sample_csv(tmp_path):
    """3 columns x 5 rows."""
    return write_csv(
        tmp_path / "sample.csv",
        ["id", "name", "score"],
        [
            [1, "Alice", 85.5],
            [2, "Bob", 92.0],
            [3, "Charlie", 78.3],
            [4, "Diana", 66.1],
            [5, "Eve", 95.1],
        ],
    )


@pytest.fixture
def large_csv(tmp_path):
    """CSV with 1500 rows for testing truncation."""
    return write_csv(
        tmp_path / "large.csv",
        ["id", "value"],
        [[i, i * 10] for i in range(1500)],
    )


@pytest.fixture
def sample_workspace(workspace_manager, sample_csv):
    """A workspace whose store already holds sample_csv."""
    workspace = workspace_manager.create_workspace()
    workspace.raw_path.write_bytes(sample_csv.read_bytes())
    ingest_csv(workspace.raw_path, workspace.store_path)
    return workspace


@pytest.fixture
def large_workspace(workspace_manager, large_csv):
    workspace = workspace_manager.create_workspace()
    workspace.raw_path.write_bytes(large_csv.read_bytes())
    ingest_csv(workspace.raw_path, workspace.store_path)
    return workspace


@pytest.fixture
def client(workspace_manager):
    """TestClient whose routes store workspaces under the test's tmp_path."""
    app.dependency_overrides[get_workspace_manager] = lambda: workspace_manager
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
