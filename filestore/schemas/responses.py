"""Response schemas for API endpoints."""

from pydantic import BaseModel, Field

from filestore.schemas.files import FileInfo


class UploadResponse(BaseModel):
    """Public URL of the stored object."""

    url: str = Field(..., description="https://storage.googleapis.com/{bucket}/{key}")


class ListFilesResponse(BaseModel):
    files: list[FileInfo] = Field(default_factory=list, description="Objects under the user/directory prefix")


class HealthResponse(BaseModel):
    """Service status and bucket readiness."""

    status: str = Field(..., description="healthy | unavailable")
    bucket: str = Field(..., description="Configured bucket name")
    ready: bool = Field(..., description="True if the bucket check succeeded")
    detail: str | None = Field(None, description="Validation error when not ready")
