# app/schemas/transaction.py
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class TransactionBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    amount: Optional[float] = None
    category: Optional[str] = None
    type: Optional[str] = Field(None, description="INCOME or EXPENSE")
    date: Any = Field(None, description="Kept exactly as sent; only used for ordering")
    note: Optional[str] = None
    photo_url: Optional[str] = None

class TransactionCreate(TransactionBase):
    """Required fields are checked by the route so a missing one maps to 400"""
    pass

class TransactionUpdate(TransactionBase):
    """Only the fields present in the request body are written"""
    pass

class TransactionRead(BaseModel):
    """A stored document as it is in the store, including fields written outside the API"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    amount: Any = None
    category: Any = None
    type: Any = None
    date: Any = None
    note: Any = None
    photo_url: Any = None
    created_at: Any = None
    updated_at: Any = None

class Totals(BaseModel):
    income: float
    expense: float
    balance: float
