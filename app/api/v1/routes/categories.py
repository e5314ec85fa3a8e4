# app/api/v1/routes/categories.py
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from app.schemas.common import ApiResponse, success_response
from app.schemas.category import CategoryCreate, Category, CategoryUpdate
from app.crud.category import (
    create_category,
    get_categories,
    get_category_by_id,
    update_category,
    delete_category,
)
from app.core.database import DocumentStore
from app.api.deps import get_document_store

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("", response_model=ApiResponse[List[Category]])
async def read_categories(
    db: DocumentStore = Depends(get_document_store),
):
    return success_response(await get_categories(db))

@router.post("", response_model=ApiResponse[Category], status_code=status.HTTP_201_CREATED)
async def create_category_endpoint(
    cat_in: CategoryCreate,
    db: DocumentStore = Depends(get_document_store),
):
    if not cat_in.name:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Name is required")
    category = await create_category(cat_in, db)
    return success_response(category, "Category created successfully")

@router.get("/{category_id}", response_model=ApiResponse[Category])
async def read_category(
    category_id: str,
    db: DocumentStore = Depends(get_document_store),
):
    category = await get_category_by_id(category_id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    return success_response(category)

@router.put("/{category_id}", response_model=ApiResponse[Category])
async def update_category_endpoint(
    category_id: str,
    cat_in: CategoryUpdate,
    db: DocumentStore = Depends(get_document_store),
):
    category = await update_category(category_id, cat_in, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    return success_response(category, "Category updated successfully")

@router.delete("/{category_id}", response_model=ApiResponse[None])
async def delete_category_endpoint(
    category_id: str,
    db: DocumentStore = Depends(get_document_store),
):
    if not await delete_category(category_id, db):
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    return success_response(None, "Category deleted successfully")
