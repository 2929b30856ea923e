"""Prefix listing of stored objects as FileInfo entries."""

from filestore.providers.storage.base import ObjectMetadata, StorageBackend
from filestore.schemas.files import FileInfo
from filestore.services.mime_types import DEFAULT_MIME_TYPE
from filestore.services.url_codec import UrlCodec


def resolve_type(meta: ObjectMetadata) -> str:
    """Custom metadata "type", else backend content type, else application/octet-stream."""
    return meta.metadata.get("type") or meta.content_type or DEFAULT_MIME_TYPE


def key_basename(key: str) -> str:
    return key.rsplit("/", 1)[-1] or key


class ObjectCatalog:
    """Lists objects under a key prefix."""

    def __init__(self, backend: StorageBackend, codec: UrlCodec) -> None:
        self._backend = backend
        self._codec = codec

    async def list(self, prefix: str | None = None) -> list[FileInfo]:
        """All objects under "{prefix}/", or the whole bucket when prefix is None. Empty list if none."""
        objects = await self._backend.list_objects(f"{prefix}/" if prefix else None)
        return [
            FileInfo(
                url=self._codec.encode(meta.name),
                name=key_basename(meta.name),
                type=resolve_type(meta),
                path=meta.name,
            )
            for meta in objects
        ]
