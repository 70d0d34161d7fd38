"""Tests for paginated blob reads."""

from __future__ import annotations

import os

import pytest

from app.blobstore.reader import read_blob_bytes
from app.core.exceptions import BlobFetchError

PAGE = 8


@pytest.mark.parametrize(
    ("size", "expected_fetches"),
    [
        (0, 1),
        (3, 1),
        (PAGE - 1, 1),
        (PAGE, 2),
        (PAGE + 1, 2),
        (3 * PAGE + 5, 4),
        (4 * PAGE, 5),
    ],
)
def test_read_blob_bytes_fetches_pages_until_short_read(blob_store, size, expected_fetches):
    data = os.urandom(size)
    blob_key = blob_store.put(data, "photo.jpg")

    result = read_blob_bytes(blob_store, blob_key, PAGE)

    assert result == data
    assert len(blob_store.fetch_calls) == expected_fetches


def test_read_blob_bytes_requests_inclusive_consecutive_ranges(blob_store):
    blob_key = blob_store.put(b"x" * (2 * PAGE + 1))

    read_blob_bytes(blob_store, blob_key, PAGE)

    assert blob_store.fetch_calls == [
        (blob_key, 0, PAGE - 1),
        (blob_key, PAGE, 2 * PAGE - 1),
        (blob_key, 2 * PAGE, 3 * PAGE - 1),
    ]


def test_exact_multiple_ends_with_empty_page(blob_store):
    blob_key = blob_store.put(b"y" * (2 * PAGE))

    assert read_blob_bytes(blob_store, blob_key, PAGE) == b"y" * (2 * PAGE)
    last_key, last_start, _ = blob_store.fetch_calls[-1]
    assert last_start == 2 * PAGE


def test_fetch_error_propagates_without_retry(blob_store):
    with pytest.raises(BlobFetchError):
        read_blob_bytes(blob_store, "missing", PAGE)
    assert len(blob_store.fetch_calls) == 1


def test_fetch_size_must_be_positive(blob_store):
    blob_key = blob_store.put(b"data")
    with pytest.raises(ValueError):
        read_blob_bytes(blob_store, blob_key, 0)
    assert blob_store.fetch_calls == []
