# app/core/storage.py
"""
Blob store access for receipt images.

The Cloud Storage client is synchronous, so every call is pushed to a worker
thread to keep the event loop free.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from google.api_core.exceptions import NotFound
from google.cloud import storage
from google.oauth2 import service_account

from .config import Settings

logger = logging.getLogger(__name__)

PUBLIC_URL_BASE = "https://storage.googleapis.com"


class BlobNotFoundError(Exception):
    """Raised when a blob key does not exist in the bucket"""


class BlobStore:
    bucket_name: str

    async def save(
        self,
        key: str,
        data: bytes,
        content_type: str,
        cache_control: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    async def make_public(self, key: str) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        raise NotImplementedError

    def public_url(self, key: str) -> str:
        return f"{PUBLIC_URL_BASE}/{self.bucket_name}/{key}"


class CloudStorageBlobStore(BlobStore):
    def __init__(self, client, bucket_name: str):
        self.client = client
        self.bucket_name = bucket_name
        self.bucket = client.bucket(bucket_name)

    async def save(self, key, data, content_type, cache_control=None):
        blob = self.bucket.blob(key)
        if cache_control:
            blob.cache_control = cache_control
        await asyncio.to_thread(blob.upload_from_string, data, content_type=content_type)

    async def make_public(self, key):
        await asyncio.to_thread(self.bucket.blob(key).make_public)

    async def delete(self, key):
        try:
            await asyncio.to_thread(self.bucket.blob(key).delete)
        except NotFound as e:
            raise BlobNotFoundError(f"No such object: {self.bucket_name}/{key}") from e


@dataclass
class StoredBlob:
    data: bytes
    content_type: str
    cache_control: Optional[str] = None
    public: bool = False


class InMemoryBlobStore(BlobStore):
    def __init__(self, bucket_name: str = "local-bucket"):
        self.bucket_name = bucket_name
        self.blobs: Dict[str, StoredBlob] = {}

    async def save(self, key, data, content_type, cache_control=None):
        self.blobs[key] = StoredBlob(data=data, content_type=content_type, cache_control=cache_control)

    async def make_public(self, key):
        if key not in self.blobs:
            raise BlobNotFoundError(f"No such object: {self.bucket_name}/{key}")
        self.blobs[key].public = True

    async def delete(self, key):
        if self.blobs.pop(key, None) is None:
            raise BlobNotFoundError(f"No such object: {self.bucket_name}/{key}")


def build_blob_store(settings: Settings) -> BlobStore:
    """Create the blob store selected by STORE_BACKEND"""
    if settings.STORE_BACKEND == "memory":
        logger.info("Using in-memory blob store")
        return InMemoryBlobStore(bucket_name=settings.bucket_name)

    credentials = None
    if settings.FIREBASE_CREDENTIALS_FILE:
        credentials = service_account.Credentials.from_service_account_file(
            settings.FIREBASE_CREDENTIALS_FILE
        )
    client = storage.Client(project=settings.FIREBASE_PROJECT_ID, credentials=credentials)
    logger.info(f"🔧 Configured Cloud Storage blob store (bucket={settings.bucket_name})")
    return CloudStorageBlobStore(client, settings.bucket_name)
