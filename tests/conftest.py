"""
Shared fixtures: one app per test, backed by either storage variant.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from inventory_api.config import Settings
from inventory_api.main import create_app
from inventory_api.photos import PhotoStore


@pytest.fixture
def photo_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def photos(photo_dir: Path) -> PhotoStore:
    return PhotoStore(str(photo_dir))


def _settings(tmp_path: Path, photo_dir: Path, storage: str) -> Settings:
    return Settings(
        cache_dir=str(photo_dir),
        storage=storage,
        database_url=f"sqlite:///{tmp_path / 'inventory.db'}",
        db_retry_interval=0.01,
        db_retry_attempts=3,
    )


@pytest.fixture
def memory_client(tmp_path: Path, photo_dir: Path):
    app = create_app(_settings(tmp_path, photo_dir, "memory"))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def sql_client(tmp_path: Path, photo_dir: Path):
    app = create_app(_settings(tmp_path, photo_dir, "sql"))
    with TestClient(app) as client:
        yield client


@pytest.fixture(params=["memory", "sql"])
def client(request, tmp_path: Path, photo_dir: Path):
    """Client for each storage variant in turn."""
    app = create_app(_settings(tmp_path, photo_dir, request.param))
    with TestClient(app) as client:
        yield client


def _register(client: TestClient, name: str, description: str = None, photo=None):
    data = {"inventory_name": name}
    if description is not None:
        data["description"] = description
    files = None
    if photo is not None:
        filename, content = photo
        files = {"photo": (filename, content, "image/png")}
    return client.post("/register", data=data, files=files)


@pytest.fixture
def register():
    """POST /register with an optional (filename, bytes) photo."""
    return _register
