# app/utils/transaction_filters.py
"""
Transaction query building.

Listing runs in two stages: the type/category predicates and the date sort
are pushed down to the document store, then the free-text search runs in
memory over whatever the store returned.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from app.core.database import QueryFilter

@dataclass(frozen=True)
class TransactionQuery:
    type: Optional[str] = None
    category_ids: Optional[str] = None
    text: Optional[str] = None

def parse_category_ids(raw: Optional[str]) -> Optional[List[str]]:
    """
    Split a comma-separated categoryIds value.

    Returns None when there is nothing to filter on (absent or blank), and a
    possibly empty list otherwise. Entries are trimmed and empty ones dropped,
    so " , ," yields [] and the query matches nothing.
    """
    if raw is None or not raw.strip():
        return None
    return [part.strip() for part in raw.split(",") if part.strip()]

def build_store_filters(query: TransactionQuery) -> Optional[List[QueryFilter]]:
    """
    Predicates pushed down to the store.

    Returns None when the query can match nothing, so the caller can skip the
    store round-trip entirely.
    """
    filters: List[QueryFilter] = []
    if query.type:
        filters.append(QueryFilter("type", "==", query.type))

    category_ids = parse_category_ids(query.category_ids)
    if category_ids is not None:
        if not category_ids:
            return None
        filters.append(QueryFilter("category", "in", category_ids))
    return filters

def _lowered(value: Any) -> str:
    if value is None:
        return ""
    return str(value).lower()

def matches_text(transaction: Dict[str, Any], text: str) -> bool:
    """Case-insensitive substring match over note and category"""
    needle = text.lower()
    return needle in _lowered(transaction.get("note")) or needle in _lowered(transaction.get("category"))

def apply_text_filter(transactions: Iterable[Dict[str, Any]], text: Optional[str]) -> List[Dict[str, Any]]:
    if not text:
        return list(transactions)
    return [tx for tx in transactions if matches_text(tx, text)]
