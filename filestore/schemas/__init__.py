"""File and API response schemas."""

from filestore.schemas.files import FileDescriptor, FileInfo, UploadOptions
from filestore.schemas.responses import HealthResponse, ListFilesResponse, UploadResponse

__all__ = [
    "FileDescriptor",
    "FileInfo",
    "UploadOptions",
    "HealthResponse",
    "ListFilesResponse",
    "UploadResponse",
]
