"""
Tests for the multipart upload endpoint.

Files are stored in the LocalBlobStore from conftest, rooted in tmp_path.
"""

from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from maskshare.config import settings
from maskshare.core.storage import BlobStore, LocalBlobStore, get_blob_store

BOUNDARY = "maskshare-test-boundary"


def _multipart_body(filename: str, payload: bytes) -> bytes:
    """Hand-built single-file multipart body, for requests sent without Content-Length."""
    head = (
        f"--{BOUNDARY}\r\n"
        f'Content-Disposition: form-data; name="file"; filename="{filename}"\r\n'
        "Content-Type: application/octet-stream\r\n\r\n"
    ).encode()
    return head + payload + f"\r\n--{BOUNDARY}--\r\n".encode()


async def _chunked(body: bytes):
    yield body


class FailingBlobStore(BlobStore):
    """Blob store whose uploads always fail."""

    async def upload(self, local_path: Path, key: str, content_type: str | None = None) -> None:
        raise RuntimeError("bucket unavailable")

    async def make_public(self, key: str) -> None:
        raise AssertionError("not reached")

    async def public_url(self, key: str) -> str:
        raise AssertionError("not reached")


@pytest.mark.api
class TestUpload:
    """Tests for POST /api/v1/uploads endpoint."""

    async def test_single_file(self, client: AsyncClient, blob_store: LocalBlobStore):
        response = await client.post(
            "/api/v1/uploads",
            files={"preview": ("fox.png", b"\x89PNG fake image", "image/png")},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["fields"] == {}
        assert len(data["files"]) == 1

        uploaded = data["files"][0]
        assert uploaded["fieldname"] == "preview"
        assert uploaded["originalName"] == "fox.png"
        assert uploaded["url"].startswith("http://test/files/")
        assert uploaded["url"].endswith("-fox.png")

        key = uploaded["url"].rsplit("/", 1)[1]
        assert (blob_store.public_dir / key).read_bytes() == b"\x89PNG fake image"
        assert not (blob_store.private_dir / key).exists()

    async def test_multiple_files_and_fields(
        self, client: AsyncClient, blob_store: LocalBlobStore
    ):
        response = await client.post(
            "/api/v1/uploads",
            data={"maskName": "Fox", "note": "previews"},
            files=[
                ("images", ("front.png", b"front", "image/png")),
                ("images", ("side.png", b"side", "image/png")),
                ("mask", ("fox.json", b"{}", "application/json")),
            ],
        )
        assert response.status_code == 200
        data = response.json()
        assert data["fields"] == {"maskName": "Fox", "note": "previews"}
        assert [f["originalName"] for f in data["files"]] == ["front.png", "side.png", "fox.json"]
        assert [f["fieldname"] for f in data["files"]] == ["images", "images", "mask"]

        urls = [f["url"] for f in data["files"]]
        assert len(set(urls)) == 3
        assert len(list(blob_store.public_dir.iterdir())) == 3

    async def test_same_filename_twice_gets_distinct_keys(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/uploads",
            files=[
                ("images", ("same.png", b"a", "image/png")),
                ("images", ("same.png", b"b", "image/png")),
            ],
        )
        urls = [f["url"] for f in response.json()["files"]]
        assert urls[0] != urls[1]

    async def test_no_files(self, client: AsyncClient):
        response = await client.post("/api/v1/uploads", data={"note": "nothing attached"})
        assert response.status_code == 400
        assert response.text == "No files uploaded"

    async def test_too_large_by_content_length(
        self, client: AsyncClient, blob_store: LocalBlobStore, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 64)

        response = await client.post(
            "/api/v1/uploads",
            files={"file": ("big.bin", b"x" * 1024, "application/octet-stream")},
        )
        assert response.status_code == 413
        assert response.json() == {"success": False, "error": "File too large"}
        assert list(blob_store.public_dir.iterdir()) == []

    async def test_too_large_while_streaming(
        self, client: AsyncClient, blob_store: LocalBlobStore, monkeypatch: pytest.MonkeyPatch
    ):
        """Chunked requests carry no Content-Length; the byte budget still applies."""
        monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 64)

        response = await client.post(
            "/api/v1/uploads",
            content=_chunked(_multipart_body("big.bin", b"x" * 1024)),
            headers={"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"},
        )
        assert response.status_code == 413
        assert response.json() == {"success": False, "error": "File too large"}
        assert list(blob_store.public_dir.iterdir()) == []

    async def test_stops_reading_once_over_limit(
        self, client: AsyncClient, blob_store: LocalBlobStore, monkeypatch: pytest.MonkeyPatch
    ):
        """An oversized chunked body is rejected without reading the rest of it."""
        monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 256)
        body = _multipart_body("big.bin", b"x" * 64 * 100)
        sent = 0

        async def stream():
            nonlocal sent
            for start in range(0, len(body), 64):
                sent += 1
                yield body[start : start + 64]

        response = await client.post(
            "/api/v1/uploads",
            content=stream(),
            headers={"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"},
        )
        assert response.status_code == 413
        assert response.json() == {"success": False, "error": "File too large"}
        assert sent < 20
        assert list(blob_store.private_dir.iterdir()) == []

    async def test_storage_failure_is_500(self, client: AsyncClient, app: FastAPI):
        app.dependency_overrides[get_blob_store] = lambda: FailingBlobStore()

        response = await client.post(
            "/api/v1/uploads",
            files={"file": ("fox.png", b"data", "image/png")},
        )
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}

    async def test_wrong_method(self, client: AsyncClient):
        response = await client.get("/api/v1/uploads")
        assert response.status_code == 405
