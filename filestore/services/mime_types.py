"""Fixed extension -> MIME type table. Anything unknown is application/octet-stream."""

from pathlib import PurePosixPath

DEFAULT_MIME_TYPE = "application/octet-stream"

_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".txt": "text/plain",
    ".json": "application/json",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def resolve_mime_type(filename: str) -> str:
    ext = PurePosixPath(filename or "").suffix.lower()
    return _CONTENT_TYPES.get(ext, DEFAULT_MIME_TYPE)
