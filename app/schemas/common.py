# app/schemas/common.py
from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapped around every response body"""
    success: bool
    data: Optional[T] = None
    message: str

def success_response(data: Any, message: str = "Success") -> dict:
    return {"success": True, "data": data, "message": message}

def error_response(message: str) -> dict:
    return {"success": False, "data": None, "message": message}
