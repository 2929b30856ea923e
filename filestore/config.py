"""
Application configuration loaded from environment variables.
Use .env file or export variables; see .env.example for the keys.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from filestore.errors import ConfigurationError


class Settings(BaseSettings):
    """Environment-based settings. Validates on load."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google Cloud
    gcp_project_id: str = ""
    gcs_bucket_name: str = ""
    # Service account JSON; empty means application default credentials
    gcp_key_file_path: str = ""

    # Uploads
    default_user_id: str | None = None
    allow_public_access: bool = True
    validate_bucket_on_startup: bool = True

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 8000

    @field_validator("gcp_project_id", "gcs_bucket_name", "gcp_key_file_path")
    @classmethod
    def strip_gcp(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("default_user_id")
    @classmethod
    def blank_user_is_none(cls, v: str | None) -> str | None:
        v = (v or "").strip()
        return v or None

    @model_validator(mode="after")
    def require_gcp_settings(self) -> "Settings":
        for name, val in [
            ("GCP_PROJECT_ID", self.gcp_project_id),
            ("GCS_BUCKET_NAME", self.gcs_bucket_name),
        ]:
            if not val:
                raise ValueError(f"{name} is required")
        return self

    @property
    def key_file_configured(self) -> bool:
        """True if GCP_KEY_FILE_PATH is set."""
        return bool(self.gcp_key_file_path)


def resolve_key_file_path(key_file_path: str, base_dir: Path | None = None) -> Path:
    """Absolute path of the service account key. Relative paths resolve against base_dir (default: cwd).

    Raises ConfigurationError if the file does not exist.
    """
    path = Path(key_file_path)
    if not path.is_absolute():
        path = (base_dir or Path.cwd()) / path
    path = path.resolve()
    if not path.is_file():
        raise ConfigurationError(f"The provided key file was not found at path: {path}")
    return path


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (env read once). Raises ConfigurationError on invalid settings."""
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid filestore configuration: {e}") from e
