# app/api/v1/routes/transactions.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional

from app.schemas.common import ApiResponse, success_response
from app.schemas.transaction import (
    TransactionCreate,
    TransactionRead,
    TransactionUpdate,
)
from app.crud.transaction import (
    create_transaction,
    get_transactions,
    get_transaction_by_id,
    update_transaction,
    delete_transaction,
)
from app.core.config import Settings
from app.core.database import DocumentStore
from app.core.storage import BlobStore
from app.api.deps import get_blob_store, get_document_store, get_settings
from app.models.transaction import REQUIRED_FIELDS
from app.utils.transaction_filters import TransactionQuery

router = APIRouter(prefix="/transactions", tags=["transactions"])

@router.get("", response_model=ApiResponse[List[TransactionRead]])
async def read_transactions(
    text: Optional[str] = Query(None, description="Case-insensitive search over note and category"),
    type_: Optional[str] = Query(None, alias="type", description="INCOME or EXPENSE"),
    category_ids: Optional[str] = Query(None, alias="categoryIds", description="Comma-separated category ids"),
    db: DocumentStore = Depends(get_document_store),
):
    query = TransactionQuery(type=type_, category_ids=category_ids, text=text)
    return success_response(await get_transactions(db, query))

@router.get("/{transaction_id}", response_model=ApiResponse[TransactionRead])
async def read_transaction(
    transaction_id: str,
    db: DocumentStore = Depends(get_document_store),
):
    tx = await get_transaction_by_id(transaction_id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return success_response(tx)

@router.post("", response_model=ApiResponse[TransactionRead], status_code=status.HTTP_201_CREATED)
async def create_transaction_endpoint(
    tx_in: TransactionCreate,
    db: DocumentStore = Depends(get_document_store),
):
    # A field counts as missing when absent, null or an empty string; amount 0 is allowed
    values = tx_in.model_dump()
    if any(values[field] is None or values[field] == "" for field in REQUIRED_FIELDS):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: " + ", ".join(REQUIRED_FIELDS),
        )
    tx = await create_transaction(tx_in, db)
    return success_response(tx, "Transaction created successfully")

@router.put("/{transaction_id}", response_model=ApiResponse[TransactionRead])
async def update_transaction_endpoint(
    transaction_id: str,
    tx_in: TransactionUpdate,
    db: DocumentStore = Depends(get_document_store),
):
    tx = await update_transaction(transaction_id, tx_in, db)
    if not tx:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return success_response(tx, "Transaction updated successfully")

@router.delete("/{transaction_id}", response_model=ApiResponse[None])
async def delete_transaction_endpoint(
    transaction_id: str,
    db: DocumentStore = Depends(get_document_store),
    blobs: BlobStore = Depends(get_blob_store),
    config: Settings = Depends(get_settings),
):
    tx = await get_transaction_by_id(transaction_id, db)
    if not tx:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    await delete_transaction(tx, db, blobs, config.RECEIPTS_FOLDER)
    return success_response(None, "Transaction deleted successfully")
