"""Bounded retry with exponential backoff around single-shot object writes."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from filestore.errors import UploadError
from filestore.providers.storage.base import StorageBackend

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
BASE_DELAY_MS = 100


def backoff_seconds(attempt: int, base_delay_ms: int = BASE_DELAY_MS) -> float:
    """Delay after failed attempt n (1-indexed): 2**n * base ms."""
    return (2**attempt) * base_delay_ms / 1000


class RetryingWriter:
    """Writes a full buffer to the backend, retrying failed attempts with backoff."""

    def __init__(
        self,
        backend: StorageBackend,
        max_attempts: int = MAX_ATTEMPTS,
        base_delay_ms: int = BASE_DELAY_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._backend = backend
        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms
        self._sleep = sleep

    async def write(
        self,
        key: str,
        content: bytes,
        content_type: str | None,
        metadata: dict[str, str] | None = None,
    ) -> None:
        """
        Store content under key. Raises UploadError once every attempt has failed;
        the last attempt's exception is chained as the cause.
        """
        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                await self._backend.upload(key, content, content_type, dict(metadata or {}))
                return
            except Exception as e:
                last_error = e
                logger.warning(
                    "Upload attempt %d/%d failed for %s: %s",
                    attempt,
                    self.max_attempts,
                    key,
                    e,
                )
                if attempt < self.max_attempts:
                    await self._sleep(backoff_seconds(attempt, self.base_delay_ms))

        detail = str(last_error) if last_error is not None else ""
        if detail:
            message = f"Unable to upload file after {self.max_attempts} attempts: {detail}"
        else:
            message = f"Unable to upload file after {self.max_attempts} attempts due to an unknown error."
        raise UploadError(
            message,
            attempts=self.max_attempts,
            last_error=last_error,
            bucket=self._backend.bucket_name,
            key=key,
        ) from last_error
