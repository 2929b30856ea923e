"""Storage backends: gcs (Google Cloud Storage)."""

from filestore.config import get_settings
from filestore.providers.storage.base import ObjectMetadata, StorageBackend
from filestore.providers.storage.gcs import GCSStorageBackend

_BACKEND: StorageBackend | None = None


def get_storage_backend() -> StorageBackend:
    """Return the GCS backend for the configured bucket. Cached per process."""
    global _BACKEND
    if _BACKEND is not None:
        return _BACKEND
    _BACKEND = GCSStorageBackend.from_settings(get_settings())
    return _BACKEND


__all__ = [
    "ObjectMetadata",
    "StorageBackend",
    "GCSStorageBackend",
    "get_storage_backend",
]
