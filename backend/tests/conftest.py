"""Pytest fixtures for the sync backend.

Provides reusable test fixtures for:
- An in-memory remote file system standing in for FTP/SFTP servers
- Settings and a RemoteSyncService wired to that fake
- Authenticated test clients with JWT tokens

Usage:
    def test_fetch(client, auth_headers, remote_fs):
        remote_fs.add_file("/site/index.html", "<html></html>")
        response = client.post("/api/ftp", json={"host": "h", "path": "/site"},
                               headers=auth_headers)
        assert response.status_code == 200
"""

import os
import sys
from pathlib import Path

# Set environment variables BEFORE any imports to ensure they take effect
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-256-bits-minimum-length-required-for-security")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("ENVIRONMENT", "test")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))
sys.path.insert(0, str(Path(__file__).parent))

from typing import Generator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from fixtures.remote_fs import InMemoryRemoteFileSystem, RecordingFactory
from hotfix.auth.jwt import create_access_token
from hotfix.config import Settings
from hotfix.main import create_app
from hotfix.remote_sync.router import get_sync_service
from hotfix.remote_sync.service import RemoteSyncService


@pytest.fixture
def remote_fs() -> InMemoryRemoteFileSystem:
    """Empty remote tree (only "/" exists)."""
    return InMemoryRemoteFileSystem()


@pytest.fixture
def remote_fs_factory(remote_fs) -> RecordingFactory:
    """Factory handing out remote_fs and recording every open request."""
    return RecordingFactory(remote_fs)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def sync_service(settings, remote_fs_factory) -> RemoteSyncService:
    return RemoteSyncService(settings, remote_fs_factory=remote_fs_factory)


@pytest.fixture
def auth_token() -> str:
    return create_access_token(user_id=uuid4(), email="editor@example.com")


@pytest.fixture
def auth_headers(auth_token) -> dict:
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def app(sync_service):
    application = create_app()
    application.dependency_overrides[get_sync_service] = lambda: sync_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Test client that turns unhandled exceptions into 500 responses."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
