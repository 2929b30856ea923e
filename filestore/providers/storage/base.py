"""Storage backend protocol: the object-store primitives FileService depends on."""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass
class ObjectMetadata:
    """Stored object metadata as reported by the backend."""

    name: str
    content_type: str | None = None
    size: int | None = None
    metadata: dict[str, str] = field(default_factory=dict)


class StorageBackend(Protocol):
    """One bucket of an object store. All calls are coroutines; implementations own their I/O."""

    bucket_name: str

    async def bucket_exists(self) -> bool:
        """True if the bucket exists and is accessible with the current credentials."""
        ...

    async def object_exists(self, key: str) -> bool:
        ...

    async def get_metadata(self, key: str) -> ObjectMetadata:
        """Content type, size and custom metadata. Raises ObjectNotFoundError if absent."""
        ...

    async def download(self, key: str) -> bytes:
        """Read the whole object into memory. Raises ObjectNotFoundError if absent."""
        ...

    async def upload(
        self,
        key: str,
        content: bytes,
        content_type: str | None,
        metadata: dict[str, str],
    ) -> None:
        """Single-shot, non-resumable write of the full buffer. No backend-side retry."""
        ...

    async def delete(self, key: str) -> None:
        """Remove the object. Raises ObjectNotFoundError if absent."""
        ...

    async def list_objects(self, prefix: str | None = None) -> list[ObjectMetadata]:
        """Every object whose key starts with prefix (whole bucket when None), all pages."""
        ...

    async def get_iam_policy(self, requested_policy_version: int = 3) -> Any:
        """Bucket IAM policy: exposes `bindings` (list of {"role", "members"}) and `version`."""
        ...

    async def set_iam_policy(self, policy: Any) -> Any:
        ...

    async def make_public(self, key: str) -> None:
        """Grant anonymous read on the object ACL."""
        ...
