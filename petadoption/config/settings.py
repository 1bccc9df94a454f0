from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    jwt_secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    jwt_access_token_expires_minutes: int = 60 * 24 * 30
    jwt_issuer: str | None = None
    jwt_audience: str | None = None
    # Lets the register endpoint honour role="admin"; keep off outside local setups
    allow_admin_signup: bool = False
    # CORS
    cors_allow_origins: str = "*"
    # Photo uploads (local disk unless S3 is configured)
    upload_dir: str = "uploads"
    uploads_url_prefix: str = "/uploads"
    max_upload_files: int = 5
    max_upload_bytes: int = 5 * 1024 * 1024
    # S3 storage (optional)
    s3_bucket: str | None = None
    s3_region: str | None = None
    s3_prefix: str = ""  # e.g. "dev/" or "prod/"
    s3_public_url_base: str | None = None

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_async_driver(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        if value.startswith("sqlite://") and "+" not in value.split("://", 1)[0]:
            return value.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]

    @property
    def uses_s3(self) -> bool:
        return bool(self.s3_bucket and self.s3_region)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
