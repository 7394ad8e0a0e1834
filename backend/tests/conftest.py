from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import robostore.models  # noqa
from robostore.api.deps import get_upload_dir
from robostore.core.db import Base, get_db
from robostore.core.errors import UploadError
from robostore.main import create_app
from robostore.services.product_pipeline import ProductWritePipeline
from robostore.services.product_repository import ProductRepository


class FakeMediaStore:
    """In-memory media store that records every call and fails on request."""

    def __init__(self):
        self.stored: dict[str, str] = {}
        self.upload_calls: list[str] = []
        self.delete_calls: list[str] = []
        self.fail_upload_at: int | None = None  # 1-based upload call number
        self.fail_upload_auth = False
        self.fail_delete: set[str] = set()
        self._counter = 0

    def upload(self, local_file_path):
        path = Path(local_file_path)
        assert path.exists(), f"upload got a missing temp file: {path}"
        self.upload_calls.append(path.name)
        if self.fail_upload_at == len(self.upload_calls):
            raise UploadError("Failed to upload image: simulated outage", auth_failed=self.fail_upload_auth)

        self._counter += 1
        handle = f"robotics_products/img{self._counter}"
        self.stored[handle] = path.name
        return {"url": f"https://res.cloudinary.test/{handle}.png", "storage_handle": handle}

    def delete(self, storage_handle):
        self.delete_calls.append(storage_handle)
        if storage_handle in self.fail_delete:
            raise UploadError(f"Failed to delete image {storage_handle}: simulated outage")
        self.stored.pop(storage_handle, None)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(db):
    return ProductRepository(db)


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def pipeline(repository, media_store):
    return ProductWritePipeline(repository, media_store)


@pytest.fixture
def make_image(tmp_path):
    """Write a small temp image file, like the upload spooler does."""
    spool = tmp_path / "spool"
    spool.mkdir()

    def _make(name: str = "photo.png") -> Path:
        path = spool / name
        path.write_bytes(b"\x89PNG\r\n\x1a\nfake")
        return path

    return _make


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(session_factory, media_store, upload_dir):
    app = create_app(media_store=media_store)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_upload_dir] = lambda: upload_dir
    return TestClient(app, raise_server_exceptions=False)


def valid_fields(**overrides) -> dict:
    fields = {
        "name": "Falcon X4 Racing Drone",
        "description": "5-inch FPV racing quad",
        "price": "349.99",
        "category": "Drones",
        "stock": "12",
    }
    fields.update(overrides)
    return fields
