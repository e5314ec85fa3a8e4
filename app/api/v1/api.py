from fastapi import APIRouter

from app.api.v1.routes import categories, totals, transactions, upload

api_router = APIRouter()

api_router.include_router(transactions.router)
api_router.include_router(totals.router)
api_router.include_router(categories.router)
api_router.include_router(upload.router)
