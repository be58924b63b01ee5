"""
Google Cloud Storage backend for uploaded files.

Required settings when STORAGE_TYPE=gcs:
- GCS_BUCKET: name of the Cloud Storage bucket that holds uploads
- GCS_PREFIX: path prefix inside the bucket, default "uploads/"

Credentials come from Application Default Credentials. On local dev set
GOOGLE_APPLICATION_CREDENTIALS to a service-account JSON file.
"""

import asyncio
import threading
from pathlib import Path

from google.cloud import storage  # type: ignore[import-untyped]

from maskshare.core.logging import get_logger
from maskshare.core.storage import BlobStore

logger = get_logger(__name__)


class GCSBlobStore(BlobStore):
    """Blob store backed by a Cloud Storage bucket.

    The google-cloud-storage client is blocking, and creating it resolves
    credentials, possibly over the network. Client creation and every blob
    call therefore run in a worker thread, never on the event loop.
    """

    def __init__(self, bucket_name: str, base_prefix: str = "uploads/"):
        self.bucket_name = bucket_name
        # Ensure prefix ends with a trailing slash if non-empty
        if base_prefix and not base_prefix.endswith("/"):
            base_prefix = base_prefix + "/"
        self.base_prefix = base_prefix

        # Lazily created client & bucket, reused across uploads
        self._client: storage.Client | None = None
        self._bucket: storage.Bucket | None = None
        self._init_lock = threading.Lock()

    @property
    def client(self) -> storage.Client:
        with self._init_lock:
            if self._client is None:
                self._client = storage.Client()
            return self._client

    @property
    def bucket(self) -> storage.Bucket:
        if self._bucket is None:
            client = self.client
            with self._init_lock:
                if self._bucket is None:
                    self._bucket = client.bucket(self.bucket_name)
        return self._bucket

    def _blob(self, key: str) -> storage.Blob:
        return self.bucket.blob(f"{self.base_prefix}{key}")

    def _upload_sync(self, local_path: Path, key: str, content_type: str | None) -> None:
        self._blob(key).upload_from_filename(str(local_path), content_type=content_type)

    def _make_public_sync(self, key: str) -> None:
        self._blob(key).make_public()

    def _public_url_sync(self, key: str) -> str:
        return str(self._blob(key).public_url)

    async def upload(self, local_path: Path, key: str, content_type: str | None = None) -> None:
        if not local_path.exists():
            raise FileNotFoundError(f"Local file not found: {local_path}")
        await asyncio.to_thread(self._upload_sync, local_path, key, content_type)
        logger.debug("blob_uploaded", key=key, backend="gcs", bucket=self.bucket_name)

    async def make_public(self, key: str) -> None:
        await asyncio.to_thread(self._make_public_sync, key)

    async def public_url(self, key: str) -> str:
        return await asyncio.to_thread(self._public_url_sync, key)
