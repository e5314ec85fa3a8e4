# app/api/v1/routes/totals.py
from fastapi import APIRouter, Depends

from app.schemas.common import ApiResponse, success_response
from app.schemas.transaction import Totals
from app.crud.transaction import get_totals
from app.core.config import Settings
from app.core.database import DocumentStore
from app.api.deps import get_document_store, get_settings

router = APIRouter(prefix="/totals", tags=["totals"])

@router.get("", response_model=ApiResponse[Totals])
async def read_totals(
    db: DocumentStore = Depends(get_document_store),
    config: Settings = Depends(get_settings),
):
    """
    Income, expense and balance over every stored transaction.

    Filters used by GET /transactions do not apply here.
    """
    totals = await get_totals(db, config.TOTALS_DECIMAL_PLACES)
    return success_response(totals)
