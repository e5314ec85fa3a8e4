"""Shared fixtures: the API wired to in-memory stores."""

from __future__ import annotations

import asyncio
import os

os.environ.setdefault("STORE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_blob_store, get_document_store
from app.core.database import InMemoryDocumentStore
from app.core.storage import InMemoryBlobStore
from app.main import app


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def blobs() -> InMemoryBlobStore:
    return InMemoryBlobStore(bucket_name="test-bucket")


@pytest.fixture
def client(store: InMemoryDocumentStore, blobs: InMemoryBlobStore):
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_blob_store] = lambda: blobs
    # Unhandled errors must come back as the 500 envelope instead of being re-raised
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def add_transaction(store: InMemoryDocumentStore):
    def _add(**data) -> dict:
        return asyncio.run(store.add_document("transactions", data))

    return _add
