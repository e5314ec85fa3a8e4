# app/api/deps.py
from fastapi import Request

from app.core.config import Settings, settings
from app.core.database import DocumentStore
from app.core.storage import BlobStore


def get_settings() -> Settings:
    return settings


def get_document_store(request: Request) -> DocumentStore:
    """Document store created on startup and kept on app.state"""
    return request.app.state.document_store


def get_blob_store(request: Request) -> BlobStore:
    """Blob store created on startup and kept on app.state"""
    return request.app.state.blob_store
