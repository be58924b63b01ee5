"""
Multipart upload pipeline.

Every file part of a request goes through its own pipeline:

    spool to a temp file (chunked) -> upload to the blob store
    -> make public -> resolve URL -> remove temp file

Pipelines run concurrently (bounded by MAX_CONCURRENT_UPLOADS) and are joined
before responding. The first failing pipeline cancels the others and fails the
request. All pipelines draw from one byte budget, so the size limit applies to
the request as a whole.
"""

import asyncio
import tempfile
from pathlib import Path

from starlette.datastructures import FormData, UploadFile
from starlette.requests import Request
from starlette.types import Message

from maskshare.config import settings
from maskshare.core.logging import get_logger
from maskshare.core.storage import BlobStore, generate_blob_key
from maskshare.schemas.upload import UploadedFile, UploadResponse

logger = get_logger(__name__)


class UploadTooLargeError(Exception):
    """The upload exceeded MAX_UPLOAD_SIZE."""


class UploadBudget:
    """Byte allowance shared by all file pipelines of one request."""

    def __init__(self, limit: int):
        self.limit = limit
        self.used = 0

    def consume(self, size: int) -> None:
        self.used += size
        if self.used > self.limit:
            raise UploadTooLargeError(f"Upload exceeds {self.limit} bytes")


def limit_request_body(request: Request, limit: int) -> Request:
    """
    Wrap ``request`` so reading its body fails once more than ``limit`` bytes arrive.

    Form parsing spools parts while it reads, so this caps the raw stream
    before any of it is written out, including chunked bodies that declare no
    Content-Length.
    """
    receive = request.receive
    received = 0

    async def limited_receive() -> Message:
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > limit:
                raise UploadTooLargeError(f"Upload exceeds {limit} bytes")
        return message

    return Request(request.scope, limited_receive)


def split_form(form: FormData) -> tuple[dict[str, str], list[tuple[str, UploadFile]]]:
    """Separate plain fields from file parts, keeping the order files were sent in."""
    fields: dict[str, str] = {}
    files: list[tuple[str, UploadFile]] = []
    for name, value in form.multi_items():
        if isinstance(value, UploadFile):
            files.append((name, value))
        else:
            fields[name] = value
    return fields, files


async def spool_to_disk(upload: UploadFile, path: Path, budget: UploadBudget) -> int:
    """Copy an upload to ``path`` chunk by chunk, charging ``budget``. Returns bytes written."""
    written = 0
    with open(path, "wb") as f:
        while chunk := await upload.read(settings.UPLOAD_CHUNK_SIZE):
            budget.consume(len(chunk))
            f.write(chunk)
            written += len(chunk)
    return written


def remove_temp_file(path: Path) -> None:
    """Delete a spooled temp file. Failures are logged, never raised."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("upload_temp_cleanup_failed", path=str(path), error=str(e))


async def store_file(
    fieldname: str,
    upload: UploadFile,
    temp_dir: Path,
    blob_store: BlobStore,
    budget: UploadBudget,
    semaphore: asyncio.Semaphore,
) -> UploadedFile:
    """Run one file through the pipeline and return where it ended up."""
    async with semaphore:
        key = generate_blob_key(upload.filename)
        temp_path = temp_dir / key

        size = await spool_to_disk(upload, temp_path, budget)
        await blob_store.upload(temp_path, key, content_type=upload.content_type)
        await blob_store.make_public(key)
        url = await blob_store.public_url(key)
        remove_temp_file(temp_path)

        logger.info("file_uploaded", fieldname=fieldname, key=key, size=size)
        return UploadedFile(fieldname=fieldname, original_name=upload.filename or "", url=url)


async def store_uploads(form: FormData, blob_store: BlobStore) -> UploadResponse:
    """
    Upload every file in ``form`` and echo back the plain fields.

    Raises:
        UploadTooLargeError: if the files together exceed MAX_UPLOAD_SIZE
    """
    fields, files = split_form(form)
    budget = UploadBudget(settings.MAX_UPLOAD_SIZE)
    semaphore = asyncio.Semaphore(settings.MAX_CONCURRENT_UPLOADS)

    with tempfile.TemporaryDirectory(prefix="maskshare-upload-", ignore_cleanup_errors=True) as tmp:
        temp_dir = Path(tmp)
        tasks = [
            asyncio.create_task(
                store_file(fieldname, upload, temp_dir, blob_store, budget, semaphore)
            )
            for fieldname, upload in files
        ]
        try:
            uploaded = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Let cancelled pipelines unwind before the temp dir goes away
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    return UploadResponse(fields=fields, files=list(uploaded))
