"""Error types for filestore operations.

Configuration and bucket validation errors are fatal and surface unchanged.
Write failures surface only after the retry budget is spent. Public-access
failures are never raised (they are logged by the reconciler).
"""

from __future__ import annotations


class FileStoreError(Exception):
    """Base exception for filestore operations.

    Attributes:
        message: Human-readable error message.
        bucket: Bucket associated with the operation (if applicable).
        key: Object key associated with the operation (if applicable).
    """

    def __init__(
        self,
        message: str,
        *,
        bucket: str | None = None,
        key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.bucket = bucket
        self.key = key

    def __str__(self) -> str:
        return self.message


class ConfigurationError(FileStoreError):
    """Required settings are missing or the credential key file cannot be found."""


class BucketValidationError(FileStoreError):
    """The target bucket does not exist or is not accessible.

    Once raised by readiness validation, every public operation of the same
    service instance fails with this error.
    """


class UploadError(FileStoreError):
    """Raised when every write attempt for an object failed.

    Attributes:
        attempts: Number of attempts performed.
        last_error: Exception raised by the final attempt.
    """

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        last_error: BaseException | None = None,
        bucket: str | None = None,
        key: str | None = None,
    ) -> None:
        super().__init__(message, bucket=bucket, key=key)
        self.attempts = attempts
        self.last_error = last_error


class ObjectNotFoundError(FileStoreError):
    """Raised when an object key does not exist in the bucket."""

    def __init__(
        self,
        message: str = "Object not found",
        *,
        bucket: str | None = None,
        key: str | None = None,
    ) -> None:
        super().__init__(message, bucket=bucket, key=key)
