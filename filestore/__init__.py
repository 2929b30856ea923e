"""filestore: user- and directory-scoped file storage over Google Cloud Storage."""

from filestore.errors import (
    BucketValidationError,
    ConfigurationError,
    FileStoreError,
    ObjectNotFoundError,
    UploadError,
)
from filestore.schemas.files import FileDescriptor, FileInfo, UploadOptions
from filestore.services.file_service import FileService, ReadinessState, get_file_service

__version__ = "1.0.0"

__all__ = [
    "FileService",
    "ReadinessState",
    "get_file_service",
    "FileDescriptor",
    "FileInfo",
    "UploadOptions",
    "FileStoreError",
    "ConfigurationError",
    "BucketValidationError",
    "UploadError",
    "ObjectNotFoundError",
]
