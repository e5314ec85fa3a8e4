# app/crud/transaction.py
import logging
from typing import Any, Dict, List, Optional

from app.core.database import DocumentStore, SERVER_TIMESTAMP
from app.core.storage import BlobStore
from app.models.transaction import COLLECTION
from app.schemas.transaction import TransactionCreate, TransactionUpdate
from app.utils.receipts import receipt_key_from_url
from app.utils.totals import calculate_totals
from app.utils.transaction_filters import TransactionQuery, apply_text_filter, build_store_filters

logger = logging.getLogger(__name__)

async def get_transactions(db: DocumentStore, query: TransactionQuery) -> List[Dict[str, Any]]:
    """Store-side type/category filters sorted by date desc, then the in-memory text search"""
    filters = build_store_filters(query)
    if filters is None:
        return []
    transactions = await db.list_documents(COLLECTION, filters, order_by="date", descending=True)
    return apply_text_filter(transactions, query.text)

async def get_transaction_by_id(transaction_id: str, db: DocumentStore) -> Optional[Dict[str, Any]]:
    return await db.get_document(COLLECTION, transaction_id)

async def create_transaction(tx_in: TransactionCreate, db: DocumentStore) -> Dict[str, Any]:
    data = {
        "amount": tx_in.amount,
        "category": tx_in.category,
        "type": tx_in.type,
        "date": tx_in.date,
        "note": tx_in.note or "",
        "photoUrl": tx_in.photo_url or None,
        "createdAt": SERVER_TIMESTAMP,
    }
    return await db.add_document(COLLECTION, data)

async def update_transaction(
    transaction_id: str, tx_in: TransactionUpdate, db: DocumentStore
) -> Optional[Dict[str, Any]]:
    updates = tx_in.model_dump(by_alias=True, exclude_unset=True)
    updates["updatedAt"] = SERVER_TIMESTAMP
    return await db.update_document(COLLECTION, transaction_id, updates)

async def delete_transaction(
    transaction: Dict[str, Any],
    db: DocumentStore,
    blobs: BlobStore,
    receipts_folder: str,
) -> None:
    """Delete the document; its receipt photo is removed on a best-effort basis"""
    key = receipt_key_from_url(transaction.get("photoUrl"), receipts_folder)
    if key:
        try:
            await blobs.delete(key)
        except Exception as e:
            logger.warning(f"Error deleting photo {key} from storage: {e}")
    await db.delete_document(COLLECTION, transaction["id"])

async def get_totals(db: DocumentStore, decimal_places: Optional[int] = None) -> Dict[str, float]:
    transactions = await db.list_documents(COLLECTION)
    return calculate_totals(transactions, decimal_places)
