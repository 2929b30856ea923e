"""File schemas: upload options, listing entries and in-memory file descriptors."""

import io
from dataclasses import dataclass

from pydantic import BaseModel, Field

from filestore.services.mime_types import resolve_mime_type

DEFAULT_FIELD_NAME = "file"
DEFAULT_ENCODING = "7bit"


class UploadOptions(BaseModel):
    """Per-upload options. Unset values fall back to service settings."""

    user_id: str | None = Field(None, description="Owner; defaults to DEFAULT_USER_ID")
    directory: str | None = Field(None, description="Directory under the user prefix")
    type: str | None = Field(None, description="Custom type stored in object metadata")
    make_public: bool | None = Field(None, description="Grant public read; defaults to ALLOW_PUBLIC_ACCESS")


class FileInfo(BaseModel):
    """One stored object in a listing."""

    url: str = Field(..., description="Public URL")
    name: str = Field(..., description="Last path segment of the object key")
    type: str = Field(..., description="Custom type, else content type, else application/octet-stream")
    path: str = Field(..., description="Full object key")


@dataclass
class FileDescriptor:
    """A file held in memory: produced by fetch, consumed by upload."""

    original_name: str
    content: bytes
    mime_type: str = "application/octet-stream"
    size: int | None = None
    field_name: str = DEFAULT_FIELD_NAME
    encoding: str = DEFAULT_ENCODING
    destination: str | None = None
    file_name: str | None = None
    path: str | None = None

    def __post_init__(self) -> None:
        if self.size is None:
            self.size = len(self.content)
        if self.file_name is None:
            self.file_name = self.original_name

    @property
    def stream(self) -> io.BytesIO:
        """Fresh binary stream over content; each access starts at offset 0."""
        return io.BytesIO(self.content)

    @classmethod
    def from_bytes(
        cls,
        name: str,
        content: bytes,
        mime_type: str | None = None,
        field_name: str = DEFAULT_FIELD_NAME,
    ) -> "FileDescriptor":
        """Upload descriptor for raw bytes; MIME type comes from the extension table when not given."""
        return cls(
            original_name=name,
            content=content,
            mime_type=mime_type or resolve_mime_type(name),
            field_name=field_name,
        )
