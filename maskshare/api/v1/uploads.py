"""
File upload API endpoint
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.datastructures import UploadFile

from maskshare.config import settings
from maskshare.core.errors import TOO_LARGE_MESSAGE, BoundaryRoute
from maskshare.core.logging import get_logger
from maskshare.core.storage import BlobStore, get_blob_store
from maskshare.schemas.upload import UploadResponse
from maskshare.services.upload import UploadTooLargeError, limit_request_body, store_uploads

logger = get_logger(__name__)

router = APIRouter(prefix="/uploads", tags=["uploads"], route_class=BoundaryRoute)


def _declared_length(request: Request) -> int | None:
    """Content-Length of the request, if the client sent a usable one."""
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@router.post("", response_model=UploadResponse)
async def upload_files(
    request: Request, blob_store: BlobStore = Depends(get_blob_store)
) -> UploadResponse:
    """
    Upload one or more files as multipart/form-data.

    Each file is stored under a unique key, made public, and returned with its
    URL. Non-file form fields are echoed back in `fields`.

    Errors:
    - 413 when the request exceeds MAX_UPLOAD_SIZE
    - 500 for any other failure
    """
    declared = _declared_length(request)
    if declared is not None and declared > settings.MAX_UPLOAD_SIZE:
        logger.warning("upload_rejected_too_large", content_length=declared)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE, detail=TOO_LARGE_MESSAGE
        )

    limited = limit_request_body(request, settings.MAX_UPLOAD_SIZE)
    try:
        form = await limited.form(max_files=settings.MAX_UPLOAD_FILES)
    except UploadTooLargeError as e:
        logger.warning("upload_rejected_too_large", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE, detail=TOO_LARGE_MESSAGE
        ) from e

    try:
        if not any(isinstance(value, UploadFile) for _, value in form.multi_items()):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded")
        response = await store_uploads(form, blob_store)
    except UploadTooLargeError as e:
        logger.warning("upload_rejected_too_large", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE, detail=TOO_LARGE_MESSAGE
        ) from e
    finally:
        await form.close()

    logger.info("upload_completed", files=len(response.files), fields=len(response.fields))
    return response
