"""Test configuration and fixtures for filestore tests."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from filestore.config import Settings
from filestore.errors import ObjectNotFoundError
from filestore.providers.storage.base import ObjectMetadata
from filestore.services.file_service import FileService

TEST_BUCKET = "test-bucket"
TEST_PROJECT = "test-project"


@dataclass
class FakePolicy:
    """Stand-in for google.api_core.iam.Policy: bindings list + version + etag."""

    bindings: list[dict[str, Any]] = field(default_factory=list)
    version: int = 1
    etag: str = "etag-0"


class FakeStorageBackend:
    """In-memory bucket (no external API calls). Failure hooks let tests script backend errors."""

    def __init__(self, bucket_name: str = TEST_BUCKET):
        self.bucket_name = bucket_name
        self.bucket_present = True
        self.bucket_error: Exception | None = None
        self.objects: dict[str, tuple[bytes, ObjectMetadata]] = {}
        self.policy = FakePolicy()
        # Exceptions raised by successive upload() calls before uploads succeed
        self.upload_failures: list[Exception] = []
        self.iam_error: Exception | None = None
        self.make_public_error: Exception | None = None

        self.bucket_exists_calls = 0
        self.upload_calls = 0
        self.delete_calls = 0
        self.set_policy_calls = 0
        self.public_objects: list[str] = []

    async def bucket_exists(self) -> bool:
        self.bucket_exists_calls += 1
        if self.bucket_error is not None:
            raise self.bucket_error
        return self.bucket_present

    async def object_exists(self, key: str) -> bool:
        return key in self.objects

    async def get_metadata(self, key: str) -> ObjectMetadata:
        if key not in self.objects:
            raise ObjectNotFoundError(f"File not found at path: {key}", key=key)
        return self.objects[key][1]

    async def download(self, key: str) -> bytes:
        if key not in self.objects:
            raise ObjectNotFoundError(f"File not found at path: {key}", key=key)
        return self.objects[key][0]

    async def upload(self, key: str, content: bytes, content_type: str | None, metadata: dict[str, str]) -> None:
        self.upload_calls += 1
        if self.upload_failures:
            raise self.upload_failures.pop(0)
        self.objects[key] = (
            content,
            ObjectMetadata(name=key, content_type=content_type, size=len(content), metadata=dict(metadata)),
        )

    async def delete(self, key: str) -> None:
        self.delete_calls += 1
        if key not in self.objects:
            raise ObjectNotFoundError(f"File not found at path: {key}", key=key)
        del self.objects[key]

    async def list_objects(self, prefix: str | None = None) -> list[ObjectMetadata]:
        return [meta for key, (_, meta) in sorted(self.objects.items()) if prefix is None or key.startswith(prefix)]

    async def get_iam_policy(self, requested_policy_version: int = 3) -> FakePolicy:
        if self.iam_error is not None:
            raise self.iam_error
        # Copy so callers only change stored state through set_iam_policy
        return FakePolicy(
            bindings=[{"role": b["role"], "members": set(b["members"])} for b in self.policy.bindings],
            version=self.policy.version,
            etag=self.policy.etag,
        )

    async def set_iam_policy(self, policy: FakePolicy) -> FakePolicy:
        self.set_policy_calls += 1
        self.policy = FakePolicy(bindings=list(policy.bindings), version=policy.version, etag=f"etag-{self.set_policy_calls}")
        return self.policy

    async def make_public(self, key: str) -> None:
        if self.make_public_error is not None:
            raise self.make_public_error
        self.public_objects.append(key)

    def put(self, key: str, content: bytes, content_type: str | None = None, metadata: dict[str, str] | None = None):
        """Seed an object directly."""
        self.objects[key] = (
            content,
            ObjectMetadata(name=key, content_type=content_type, size=len(content), metadata=dict(metadata or {})),
        )


class SleepRecorder:
    """Replacement for asyncio.sleep that records delays and returns immediately."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def make_settings(**overrides) -> Settings:
    values = {"gcp_project_id": TEST_PROJECT, "gcs_bucket_name": TEST_BUCKET}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def backend() -> FakeStorageBackend:
    return FakeStorageBackend()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_service(backend, sleeper):
    """Factory: FileService over the fake backend. Settings overrides as keyword arguments."""

    def _make(**overrides) -> FileService:
        return FileService(make_settings(**overrides), backend, sleep=sleeper)

    return _make
