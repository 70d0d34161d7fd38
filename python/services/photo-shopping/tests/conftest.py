"""Shared pytest fixtures for photo shopping tests."""

from __future__ import annotations

import os

os.environ.setdefault("BLOB_STORE_BACKEND", "memory")
os.environ.setdefault("SHOPPING_SERVICE_URL", "http://shopping.test")

import pytest
from fastapi.testclient import TestClient

from app.blobstore.memory import InMemoryBlobStore
from app.core.dependencies import get_blob_store, get_shopping_querier
from app.main import app


class RecordingBlobStore(InMemoryBlobStore):
    """In-memory store that records fetch and delete calls."""

    def __init__(self) -> None:
        super().__init__()
        self.fetch_calls: list[tuple[str, int, int]] = []
        self.deleted: list[str] = []

    def fetch_data(self, blob_key, start, end):
        self.fetch_calls.append((blob_key, start, end))
        return super().fetch_data(blob_key, start, end)

    def delete(self, blob_key):
        self.deleted.append(blob_key)
        super().delete(blob_key)


class DummyQuerier:
    def __init__(self, products=None, error: Exception | None = None) -> None:
        self.products = products or []
        self.error = error
        self.inputs = []

    async def query(self, query_input):
        self.inputs.append(query_input)
        if self.error is not None:
            raise self.error
        return self.products


@pytest.fixture
def blob_store() -> RecordingBlobStore:
    return RecordingBlobStore()


@pytest.fixture
def querier() -> DummyQuerier:
    return DummyQuerier()


@pytest.fixture
def client(blob_store, querier):
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_shopping_querier] = lambda: querier
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
