# app/main.py
import uvicorn
import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import settings
from app.core.database import build_document_store
from app.core.storage import build_blob_store
from app.api.v1.api import api_router
from app.schemas.common import error_response, success_response

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# STARTUP
# ------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the store clients once; handlers receive them through app.api.deps"""
    app.state.document_store = build_document_store(settings)
    app.state.blob_store = build_blob_store(settings)
    logger.info(f"✅ Document store: {app.state.document_store.name}")
    logger.info(f"✅ Blob bucket: {app.state.blob_store.bucket_name}")
    yield

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "transactions", "description": "Income and expense records"},
        {"name": "totals", "description": "Income, expense and balance over all transactions"},
        {"name": "categories", "description": "Transaction categories"},
        {"name": "upload", "description": "Receipt photos in Cloud Storage"},
    ],
)

# ------------------------------------------------------------
# ERROR HANDLERS
# Every error leaves the API in the same {success, data, message} envelope
# ------------------------------------------------------------
@app.middleware("http")
async def catch_unexpected_errors(request: Request, call_next):
    """Unexpected errors surface as 500 with the underlying message.

    Registered before CORSMiddleware so the error response still carries the CORS headers.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error(f"Error handling {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content=error_response(str(exc)))

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    message = "Invalid request: " + "; ".join(problems)
    logger.info(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=400, content=error_response(message))

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return success_response(
        {"name": settings.APP_NAME, "version": settings.VERSION},
        f"{settings.APP_NAME} is running!",
    )

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint"""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Service unhealthy: document store not initialised")
    return success_response({
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "store": store.name,
    })

# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(api_router, prefix=settings.API_PREFIX)

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("app.main:app", host="0.0.0.0", port=port, reload=False)
