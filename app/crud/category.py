# app/crud/category.py
from typing import Any, Dict, List, Optional

from app.core.database import DocumentStore, SERVER_TIMESTAMP
from app.models.category import COLLECTION, DEFAULT_CATEGORIES
from app.schemas.category import CategoryCreate, CategoryUpdate

async def get_categories(db: DocumentStore) -> List[Dict[str, Any]]:
    return await db.list_documents(COLLECTION)

async def get_category_by_id(category_id: str, db: DocumentStore) -> Optional[Dict[str, Any]]:
    return await db.get_document(COLLECTION, category_id)

async def create_category(cat_in: CategoryCreate, db: DocumentStore) -> Dict[str, Any]:
    data = {
        "name": cat_in.name,
        "color": cat_in.color or None,
        "icon": cat_in.icon or None,
        "createdAt": SERVER_TIMESTAMP,
    }
    return await db.add_document(COLLECTION, data)

async def update_category(
    category_id: str, cat_in: CategoryUpdate, db: DocumentStore
) -> Optional[Dict[str, Any]]:
    updates = cat_in.model_dump(by_alias=True, exclude_unset=True)
    updates["updatedAt"] = SERVER_TIMESTAMP
    return await db.update_document(COLLECTION, category_id, updates)

async def delete_category(category_id: str, db: DocumentStore) -> bool:
    return await db.delete_document(COLLECTION, category_id)

async def seed_default_categories(db: DocumentStore) -> List[Dict[str, Any]]:
    """Create the default categories that are not there yet.

    Returns the list of categories that were created (empty if none were needed).
    """
    existing = await get_categories(db)
    existing_names_lower = {str(c.get("name") or "").lower() for c in existing}

    created: List[Dict[str, Any]] = []
    for cat in DEFAULT_CATEGORIES:
        if cat["name"].lower() in existing_names_lower:
            continue
        created.append(await db.add_document(COLLECTION, {**cat, "createdAt": SERVER_TIMESTAMP}))
    return created
