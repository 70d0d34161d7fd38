"""Tests for uploaded file lookup and cleanup."""

from __future__ import annotations

from io import BytesIO

import pytest
from starlette.datastructures import FormData, Headers, UploadFile

from app.blobstore.uploads import discard_uploads, extract_upload
from shared_schemas.photo_shopping import BlobInfo


class DummyBlobStore:
    def __init__(self, sizes=None, failing=()) -> None:
        self.sizes = sizes or {}
        self.failing = set(failing)
        self.deleted = []

    def get_metadata(self, blob_key):
        if blob_key not in self.sizes:
            return None
        return BlobInfo(key=blob_key, size=self.sizes[blob_key])

    def delete(self, blob_key):
        if blob_key in self.failing:
            raise RuntimeError("delete failed")
        self.deleted.append(blob_key)


def _upload(data: bytes, filename: str = "photo.jpg") -> UploadFile:
    return UploadFile(
        file=BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": "image/jpeg"}),
    )


@pytest.mark.asyncio
async def test_missing_field_is_no_upload():
    store = DummyBlobStore({"k1": 10})
    assert await extract_upload(store, {"other": ["k1"]}, "photo") is None
    assert store.deleted == []


@pytest.mark.asyncio
async def test_empty_key_list_is_no_upload():
    store = DummyBlobStore()
    assert await extract_upload(store, {"photo": []}, "photo") is None
    assert store.deleted == []


@pytest.mark.asyncio
async def test_zero_size_blob_is_deleted_once():
    store = DummyBlobStore({"empty": 0})
    uploads = {"photo": ["empty"]}

    assert await extract_upload(store, uploads, "photo") is None
    assert store.deleted == ["empty"]
    assert uploads == {"photo": []}


@pytest.mark.asyncio
async def test_first_key_is_returned():
    store = DummyBlobStore({"k1": 42, "k2": 7})
    assert await extract_upload(store, {"photo": ["k1", "k2"]}, "photo") == "k1"
    assert store.deleted == []


@pytest.mark.asyncio
async def test_discard_uploads_deletes_every_key():
    store = DummyBlobStore(failing={"k2"})

    await discard_uploads(store, {"photo": ["k1", "k2"], "extra": ["k3"]})

    assert store.deleted == ["k1", "k3"]


@pytest.mark.asyncio
async def test_in_memory_store_intercepts_form_files(blob_store):
    form = FormData([
        ("photo-category", "product"),
        ("photo", _upload(b"\xff\xd8\xff\xe0jpeg")),
    ])

    uploads = await blob_store.get_uploads(form)
    blob_key = await extract_upload(blob_store, uploads, "photo")

    assert list(uploads) == ["photo"]
    assert blob_key is not None
    info = blob_store.get_metadata(blob_key)
    assert info.size == 8
    assert info.filename == "photo.jpg"
    assert info.content_type == "image/jpeg"


@pytest.mark.asyncio
async def test_in_memory_store_drops_empty_file(blob_store):
    form = FormData([("photo", _upload(b"", filename=""))])

    uploads = await blob_store.get_uploads(form)

    assert await extract_upload(blob_store, uploads, "photo") is None
    assert len(blob_store.deleted) == 1
    assert blob_store.deleted[0] not in blob_store
