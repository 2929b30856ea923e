"""Google Cloud Storage backend. The blocking client runs in worker threads via asyncio.to_thread."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

from google.api_core.exceptions import NotFound
from google.cloud import storage

from filestore.config import Settings, resolve_key_file_path
from filestore.errors import ObjectNotFoundError
from filestore.providers.storage.base import ObjectMetadata

logger = logging.getLogger(__name__)

# Read size for streaming downloads into memory
_READ_CHUNK_BYTES = 1024 * 1024


def _metadata_from_blob(blob) -> ObjectMetadata:
    return ObjectMetadata(
        name=blob.name,
        content_type=blob.content_type,
        size=int(blob.size) if blob.size is not None else None,
        metadata=dict(blob.metadata or {}),
    )


class GCSStorageBackend:
    """Storage using one Google Cloud Storage bucket."""

    def __init__(
        self,
        bucket_name: str,
        project_id: str,
        key_file_path: str = "",
        client: storage.Client | None = None,
    ) -> None:
        self.bucket_name = bucket_name
        self.project_id = project_id
        # Resolved eagerly so a bad path fails at construction, not on first request
        self._key_file = resolve_key_file_path(key_file_path) if key_file_path else None
        self._client = client
        self._client_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "GCSStorageBackend":
        if not settings.key_file_configured:
            logger.info("GCP_KEY_FILE_PATH not set; using application default credentials")
        return cls(
            bucket_name=settings.gcs_bucket_name,
            project_id=settings.gcp_project_id,
            key_file_path=settings.gcp_key_file_path if settings.key_file_configured else "",
        )

    def _get_client(self) -> storage.Client:
        if self._client is not None:
            return self._client
        # Called from to_thread workers; build at most one client
        with self._client_lock:
            if self._client is None:
                if self._key_file is not None:
                    self._client = storage.Client.from_service_account_json(
                        str(self._key_file), project=self.project_id
                    )
                else:
                    self._client = storage.Client(project=self.project_id)
        return self._client

    def _bucket(self) -> storage.Bucket:
        return self._get_client().bucket(self.bucket_name)

    def _not_found(self, key: str) -> ObjectNotFoundError:
        return ObjectNotFoundError(f"File not found at path: {key}", bucket=self.bucket_name, key=key)

    # --- sync helpers (run in threads) ---

    def _get_metadata_sync(self, key: str) -> ObjectMetadata:
        blob = self._bucket().get_blob(key)
        if blob is None:
            raise self._not_found(key)
        return _metadata_from_blob(blob)

    def _download_sync(self, key: str) -> bytes:
        blob = self._bucket().blob(key)
        chunks: list[bytes] = []
        try:
            with blob.open("rb") as fh:
                while True:
                    chunk = fh.read(_READ_CHUNK_BYTES)
                    if not chunk:
                        break
                    chunks.append(chunk)
        except NotFound as e:
            raise self._not_found(key) from e
        return b"".join(chunks)

    def _upload_sync(self, key: str, content: bytes, content_type: str | None, metadata: dict[str, str]) -> None:
        blob = self._bucket().blob(key)
        if metadata:
            blob.metadata = metadata
        # upload_from_string without chunk_size is a single multipart request (never resumable)
        blob.upload_from_string(content, content_type=content_type or "application/octet-stream", retry=None)

    def _delete_sync(self, key: str) -> None:
        try:
            self._bucket().blob(key).delete()
        except NotFound as e:
            raise self._not_found(key) from e

    def _list_sync(self, prefix: str | None) -> list[ObjectMetadata]:
        blobs = self._get_client().list_blobs(self.bucket_name, prefix=prefix)
        # Iterating the HTTPIterator walks every page
        return [_metadata_from_blob(b) for b in blobs]

    def _make_public_sync(self, key: str) -> None:
        self._bucket().blob(key).make_public()

    # --- async API ---

    async def bucket_exists(self) -> bool:
        return await asyncio.to_thread(self._bucket().exists)

    async def object_exists(self, key: str) -> bool:
        return await asyncio.to_thread(self._bucket().blob(key).exists)

    async def get_metadata(self, key: str) -> ObjectMetadata:
        return await asyncio.to_thread(self._get_metadata_sync, key)

    async def download(self, key: str) -> bytes:
        return await asyncio.to_thread(self._download_sync, key)

    async def upload(
        self,
        key: str,
        content: bytes,
        content_type: str | None,
        metadata: dict[str, str],
    ) -> None:
        await asyncio.to_thread(self._upload_sync, key, content, content_type, metadata)
        logger.info("Uploaded gs://%s/%s (%d bytes)", self.bucket_name, key, len(content))

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._delete_sync, key)
        logger.info("Deleted gs://%s/%s", self.bucket_name, key)

    async def list_objects(self, prefix: str | None = None) -> list[ObjectMetadata]:
        return await asyncio.to_thread(self._list_sync, prefix)

    async def get_iam_policy(self, requested_policy_version: int = 3) -> Any:
        return await asyncio.to_thread(
            self._bucket().get_iam_policy,
            requested_policy_version=requested_policy_version,
        )

    async def set_iam_policy(self, policy: Any) -> Any:
        return await asyncio.to_thread(self._bucket().set_iam_policy, policy)

    async def make_public(self, key: str) -> None:
        await asyncio.to_thread(self._make_public_sync, key)
