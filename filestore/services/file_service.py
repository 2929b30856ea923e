"""
FileService: upload, fetch, delete and list files in one GCS bucket, scoped by user and directory.

Every public operation first awaits bucket readiness. The bucket check runs once per
instance and its outcome (success or BucketValidationError) is memoized.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from filestore.config import Settings, get_settings
from filestore.errors import BucketValidationError, ObjectNotFoundError
from filestore.providers.storage import get_storage_backend
from filestore.providers.storage.base import StorageBackend
from filestore.providers.storage.gcs import GCSStorageBackend
from filestore.schemas.files import FileDescriptor, FileInfo, UploadOptions
from filestore.services.catalog import ObjectCatalog, key_basename
from filestore.services.mime_types import DEFAULT_MIME_TYPE
from filestore.services.naming import compose_object_key, compose_prefix
from filestore.services.public_access import PublicAccessReconciler
from filestore.services.retry import RetryingWriter
from filestore.services.url_codec import UrlCodec

logger = logging.getLogger(__name__)


class ReadinessState(str, Enum):
    """Bucket readiness: UNINITIALIZED | VALIDATING | READY | FAILED."""

    UNINITIALIZED = "uninitialized"
    VALIDATING = "validating"
    READY = "ready"
    FAILED = "failed"


class FileService:
    """Composes naming, retrying writes, public access, listing and URL mapping over one backend."""

    def __init__(
        self,
        settings: Settings,
        backend: StorageBackend | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.bucket_name = settings.gcs_bucket_name
        self.default_user_id = settings.default_user_id
        self.allow_public_access = settings.allow_public_access
        self._backend = backend if backend is not None else GCSStorageBackend.from_settings(settings)
        self._codec = UrlCodec(self.bucket_name)
        self._writer = RetryingWriter(self._backend, sleep=sleep)
        self._reconciler = PublicAccessReconciler(self._backend)
        self._catalog = ObjectCatalog(self._backend, self._codec)
        self._readiness: asyncio.Future[None] | None = None

        if settings.validate_bucket_on_startup:
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running event loop; bucket %s will be validated on first use", self.bucket_name)
            else:
                self._readiness = self._start_validation()

    @property
    def codec(self) -> UrlCodec:
        return self._codec

    @property
    def state(self) -> ReadinessState:
        task = self._readiness
        if task is None:
            return ReadinessState.UNINITIALIZED
        if not task.done():
            return ReadinessState.VALIDATING
        if task.cancelled() or task.exception() is not None:
            return ReadinessState.FAILED
        return ReadinessState.READY

    # --- readiness ---

    async def _validate_bucket(self) -> None:
        try:
            exists = await self._backend.bucket_exists()
        except Exception as e:
            raise BucketValidationError(
                f"Failed to verify bucket {self.bucket_name}: {e}",
                bucket=self.bucket_name,
            ) from e
        if not exists:
            raise BucketValidationError(
                f"Failed to verify bucket {self.bucket_name}: "
                f"Bucket {self.bucket_name} does not exist or is not accessible.",
                bucket=self.bucket_name,
            )
        logger.info("Bucket %s is ready", self.bucket_name)

    def _start_validation(self) -> asyncio.Future[None]:
        task = asyncio.ensure_future(self._validate_bucket())
        task.add_done_callback(self._log_validation_outcome)
        return task

    def _log_validation_outcome(self, task: asyncio.Future[None]) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Bucket validation failed: %s", error)

    async def ready(self) -> None:
        """Wait for bucket validation. Raises BucketValidationError, the same one on every call once failed."""
        if self._readiness is None:
            self._readiness = self._start_validation()
        # Shielded so a cancelled caller does not cancel the shared check
        await asyncio.shield(self._readiness)

    # --- public operations ---

    async def upload(self, file: FileDescriptor, options: UploadOptions | None = None) -> str:
        """
        Store file under [user/][directory/]{ts}_{rand}_{name} and return its public URL.
        The URL always denotes a stored object; public reachability is best effort.
        """
        await self.ready()
        options = options or UploadOptions()

        user_id = options.user_id if options.user_id is not None else self.default_user_id
        key = compose_object_key(compose_prefix(user_id, options.directory), file.original_name)

        metadata: dict[str, str] = {}
        if user_id:
            metadata["userId"] = user_id
        if options.type:
            metadata["type"] = options.type

        await self._writer.write(key, file.content, file.mime_type, metadata)

        make_public = options.make_public if options.make_public is not None else self.allow_public_access
        if make_public:
            await self._reconciler.ensure_public_read(key)

        return self._codec.encode(key)

    async def fetch_by_url(self, url: str) -> FileDescriptor:
        """Load a stored file (public URL or raw key) fully into memory. Raises ObjectNotFoundError if absent."""
        await self.ready()
        if not url:
            raise ValueError("The provided URL is empty.")

        key = self._codec.decode(url)
        if not await self._backend.object_exists(key):
            raise ObjectNotFoundError(f"File not found at path: {key}", bucket=self.bucket_name, key=key)

        meta = await self._backend.get_metadata(key)
        content = await self._backend.download(key)
        name = key_basename(key)
        return FileDescriptor(
            original_name=name,
            content=content,
            mime_type=meta.content_type or DEFAULT_MIME_TYPE,
            size=meta.size if meta.size is not None else len(content),
            destination=self.bucket_name,
            file_name=name,
            path=key,
        )

    async def delete(self, url: str) -> None:
        """Delete by public URL or raw key. A missing object raises ObjectNotFoundError."""
        await self.ready()
        if not url:
            raise ValueError("The provided URL is empty.")
        await self._backend.delete(self._codec.decode(url))

    async def list_files(self, directory: str | None = None, user_id: str | None = None) -> list[FileInfo]:
        """Files under [user/][directory/]; the whole bucket when neither resolves."""
        await self.ready()
        if user_id is None:
            user_id = self.default_user_id
        prefix = compose_prefix(user_id, directory)
        return await self._catalog.list(prefix)


_SERVICE: FileService | None = None


def get_file_service() -> FileService:
    """Return the process-wide FileService for the configured bucket."""
    global _SERVICE
    if _SERVICE is None:
        _SERVICE = FileService(get_settings(), get_storage_backend())
    return _SERVICE
