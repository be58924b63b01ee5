"""
Blob storage for uploaded files.

Two backends share the BlobStore interface:

- LocalBlobStore: files on disk under STORAGE_PATH. Uploads land in
  ``private/`` and move to ``public/`` when made public; ``public/`` is what
  the app serves under ``/files``.
- GCSBlobStore: a Google Cloud Storage bucket (maskshare.core.gcs_storage).

The store is built once in the application lifespan and handed to handlers
through the ``get_blob_store`` dependency.
"""

import asyncio
import shutil
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import quote

from fastapi import Request

from maskshare.config import settings
from maskshare.core.logging import get_logger

logger = get_logger(__name__)

PUBLIC_FILES_ROUTE = "/files"


def generate_blob_key(original_name: str | None) -> str:
    """
    Build a collision-resistant object key for an uploaded file.

    The key is a random hex prefix followed by the client's filename with any
    directory components stripped.
    """
    name = Path(original_name or "").name.strip() or "file"
    return f"{uuid.uuid4().hex}-{name}"


class BlobStore(ABC):
    """Object storage addressable by key."""

    @abstractmethod
    async def upload(self, local_path: Path, key: str, content_type: str | None = None) -> None:
        """Store the contents of ``local_path`` under ``key`` (private)."""

    @abstractmethod
    async def make_public(self, key: str) -> None:
        """Make the object readable without credentials."""

    @abstractmethod
    async def public_url(self, key: str) -> str:
        """Resolve the URL a client can fetch the public object from."""


class LocalBlobStore(BlobStore):
    """Blob store backed by a local directory."""

    def __init__(self, root: str | Path, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.private_dir = self.root / "private"
        self.public_dir = self.root / "public"

    def ensure_dirs(self) -> None:
        self.private_dir.mkdir(parents=True, exist_ok=True)
        self.public_dir.mkdir(parents=True, exist_ok=True)

    async def upload(self, local_path: Path, key: str, content_type: str | None = None) -> None:
        if not local_path.exists():
            raise FileNotFoundError(f"Local file not found: {local_path}")
        await asyncio.to_thread(self.ensure_dirs)
        await asyncio.to_thread(shutil.copyfile, local_path, self.private_dir / key)
        logger.debug("blob_uploaded", key=key, backend="local", content_type=content_type)

    async def make_public(self, key: str) -> None:
        source = self.private_dir / key
        if not source.exists():
            if (self.public_dir / key).exists():
                return
            raise FileNotFoundError(f"Blob not found: {key}")
        await asyncio.to_thread(self.ensure_dirs)
        await asyncio.to_thread(source.replace, self.public_dir / key)

    async def public_url(self, key: str) -> str:
        if not (self.public_dir / key).exists():
            raise FileNotFoundError(f"Blob is not public: {key}")
        return f"{self.base_url}{PUBLIC_FILES_ROUTE}/{quote(key)}"


def create_blob_store() -> BlobStore:
    """Build the blob store selected by STORAGE_TYPE."""
    if settings.STORAGE_TYPE == "gcs":
        from maskshare.core.gcs_storage import GCSBlobStore

        if not settings.GCS_BUCKET:
            raise ValueError("GCS_BUCKET must be set when STORAGE_TYPE is 'gcs'")
        return GCSBlobStore(bucket_name=settings.GCS_BUCKET, base_prefix=settings.GCS_PREFIX)

    store = LocalBlobStore(settings.STORAGE_PATH, settings.IMAGE_BASE_URL)
    store.ensure_dirs()
    return store


def get_blob_store(request: Request) -> BlobStore:
    """Dependency returning the blob store created at startup."""
    store: BlobStore = request.app.state.blob_store
    return store
