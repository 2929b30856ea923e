"""
Provider abstractions for the object store.
FileService depends only on the StorageBackend protocol; GCS is the shipped implementation.
"""

from filestore.providers.storage import get_storage_backend

__all__ = [
    "get_storage_backend",
]
