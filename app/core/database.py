# app/core/database.py
"""
Document store access.

Handlers never talk to Firestore directly; they receive a ``DocumentStore``
through ``app.api.deps``. ``FirestoreDocumentStore`` is the production
backend, ``InMemoryDocumentStore`` follows the same query semantics in-process
and backs local runs and the test-suite.
"""
import copy
import itertools
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from .config import Settings

logger = logging.getLogger(__name__)


class _ServerTimestamp:
    """Placeholder resolved by the store to its own clock when the write lands."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()

SUPPORTED_OPERATORS = ("==", "in")


@dataclass(frozen=True)
class QueryFilter:
    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op}")


class DocumentStore:
    """Collection-scoped CRUD, filtering and sorting over JSON-like documents.

    Every document is returned as a plain dict with its ``id`` merged in.
    """

    name = "abstract"

    async def list_documents(
        self,
        collection: str,
        filters: Sequence[QueryFilter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    async def get_document(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    async def add_document(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    async def update_document(
        self, collection: str, document_id: str, updates: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Apply ``updates`` to an existing document; ``None`` when it does not exist."""
        raise NotImplementedError

    async def delete_document(self, collection: str, document_id: str) -> bool:
        """Delete a document; ``False`` when it did not exist."""
        raise NotImplementedError


# ------------------------------------------------------------
# Firestore
# ------------------------------------------------------------

class FirestoreDocumentStore(DocumentStore):
    name = "firestore"

    def __init__(self, client):
        self.client = client

    @staticmethod
    def _to_firestore(data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            key: firestore.SERVER_TIMESTAMP if value is SERVER_TIMESTAMP else value
            for key, value in data.items()
        }

    @staticmethod
    def _from_snapshot(snapshot) -> Dict[str, Any]:
        return {"id": snapshot.id, **(snapshot.to_dict() or {})}

    async def list_documents(self, collection, filters=(), order_by=None, descending=False):
        query = self.client.collection(collection)
        for f in filters:
            query = query.where(filter=FieldFilter(f.field, f.op, f.value))
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        return [self._from_snapshot(snapshot) async for snapshot in query.stream()]

    async def get_document(self, collection, document_id):
        snapshot = await self.client.collection(collection).document(document_id).get()
        if not snapshot.exists:
            return None
        return self._from_snapshot(snapshot)

    async def add_document(self, collection, data):
        _, doc_ref = await self.client.collection(collection).add(self._to_firestore(data))
        snapshot = await doc_ref.get()
        return self._from_snapshot(snapshot)

    async def update_document(self, collection, document_id, updates):
        doc_ref = self.client.collection(collection).document(document_id)
        snapshot = await doc_ref.get()
        if not snapshot.exists:
            return None
        await doc_ref.update(self._to_firestore(updates))
        return self._from_snapshot(await doc_ref.get())

    async def delete_document(self, collection, document_id):
        doc_ref = self.client.collection(collection).document(document_id)
        snapshot = await doc_ref.get()
        if not snapshot.exists:
            return False
        await doc_ref.delete()
        return True


# ------------------------------------------------------------
# In-memory
# ------------------------------------------------------------

# Cross-type ordering used by Firestore: null < bool < number < timestamp < string
_TYPE_RANK = (
    (type(None), 0),
    (bool, 1),
    (int, 2),
    (float, 2),
    (datetime, 3),
    (str, 4),
)


def _sort_key(value: Any):
    for kind, rank in _TYPE_RANK:
        if isinstance(value, kind):
            if value is None:
                return (rank, 0)
            if isinstance(value, datetime) and value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return (rank, value)
    return (5, repr(value))


class InMemoryDocumentStore(DocumentStore):
    name = "memory"

    def __init__(self, clock=None):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._ids = itertools.count(1)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    def _resolve(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = self._clock()
        return {
            key: now if value is SERVER_TIMESTAMP else copy.deepcopy(value)
            for key, value in data.items()
        }

    @staticmethod
    def _matches(document: Dict[str, Any], f: QueryFilter) -> bool:
        if f.field not in document:
            return False
        if f.op == "==":
            return document[f.field] == f.value
        return document[f.field] in list(f.value)

    async def list_documents(self, collection, filters=(), order_by=None, descending=False):
        documents = [
            {"id": doc_id, **copy.deepcopy(data)}
            for doc_id, data in self._collection(collection).items()
            if all(self._matches(data, f) for f in filters)
        ]
        if order_by:
            # Documents without the ordering field are left out, as Firestore does
            documents = [doc for doc in documents if order_by in doc]
            documents.sort(key=lambda doc: _sort_key(doc[order_by]), reverse=descending)
        return documents

    async def get_document(self, collection, document_id):
        data = self._collection(collection).get(document_id)
        if data is None:
            return None
        return {"id": document_id, **copy.deepcopy(data)}

    async def add_document(self, collection, data):
        document_id = f"doc{next(self._ids):06d}"
        self._collection(collection)[document_id] = self._resolve(data)
        return await self.get_document(collection, document_id)

    async def update_document(self, collection, document_id, updates):
        documents = self._collection(collection)
        if document_id not in documents:
            return None
        documents[document_id].update(self._resolve(updates))
        return await self.get_document(collection, document_id)

    async def delete_document(self, collection, document_id):
        return self._collection(collection).pop(document_id, None) is not None


def build_document_store(settings: Settings) -> DocumentStore:
    """Create the document store selected by STORE_BACKEND"""
    if settings.STORE_BACKEND == "memory":
        logger.info("Using in-memory document store")
        return InMemoryDocumentStore()

    credentials = None
    if settings.FIREBASE_CREDENTIALS_FILE:
        credentials = service_account.Credentials.from_service_account_file(
            settings.FIREBASE_CREDENTIALS_FILE
        )
    client = firestore.AsyncClient(project=settings.FIREBASE_PROJECT_ID, credentials=credentials)
    logger.info(f"🔧 Configured Firestore document store (project={client.project})")
    return FirestoreDocumentStore(client)
