# app/api/v1/routes/upload.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas.common import ApiResponse, success_response
from app.schemas.upload import ImageUpload, UploadedImage
from app.core.config import Settings
from app.core.storage import BlobNotFoundError, BlobStore
from app.api.deps import get_blob_store, get_settings
from app.utils.receipts import CACHE_CONTROL, decode_image, default_file_name, receipt_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

@router.post("", response_model=ApiResponse[UploadedImage])
async def upload_image(
    upload_in: ImageUpload,
    blobs: BlobStore = Depends(get_blob_store),
    config: Settings = Depends(get_settings),
):
    """
    Store a base64-encoded receipt image and make it publicly readable.

    - **imageBase64**: image bytes, base64 encoded (a `data:image/...;base64,` prefix is accepted)
    - **fileName**: optional; defaults to `receipt_<epoch millis>.jpg`
    """
    if not upload_in.image_base64:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Image data is required")
    try:
        data, content_type = decode_image(upload_in.image_base64)
    except ValueError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(e))

    name = upload_in.file_name or default_file_name()
    key = receipt_key(name, config.RECEIPTS_FOLDER)
    await blobs.save(key, data, content_type=content_type, cache_control=CACHE_CONTROL)
    await blobs.make_public(key)
    logger.info(f"Uploaded receipt image {key} ({len(data)} bytes)")

    return success_response({"url": blobs.public_url(key), "fileName": name})

@router.delete("/{file_name}", response_model=ApiResponse[None])
async def delete_image(
    file_name: str,
    blobs: BlobStore = Depends(get_blob_store),
    config: Settings = Depends(get_settings),
):
    try:
        await blobs.delete(receipt_key(file_name, config.RECEIPTS_FOLDER))
    except BlobNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Image not found")
    return success_response(None, "Image deleted successfully")
