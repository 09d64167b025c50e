"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

_FIVE_MEGABYTES = 5 * 1024 * 1024


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone or UTC offset used for audit timestamps",
    )
    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Connection string of the Azure Storage account holding product images",
    )
    azure_storage_container_name: str | None = Field(
        default=None,
        description="Blob container where bulk upload images are stored",
    )
    cors_allow_origins: str = Field(
        default="http://localhost:3000",
        description="Comma separated origins allowed to call the API from a browser",
    )
    bulk_upload_max_file_bytes: int = Field(
        default=_FIVE_MEGABYTES,
        description="Maximum size accepted for the bulk upload spreadsheet",
        gt=0,
    )
    bulk_upload_max_rows: int = Field(
        default=500,
        description="Maximum number of product rows accepted per spreadsheet",
        gt=0,
    )
    bulk_upload_batch_size: int = Field(
        default=50,
        description="Number of products created per batch when committing",
        gt=0,
    )
    bulk_upload_max_images: int = Field(
        default=200,
        description="Maximum number of images accepted per upload request",
        gt=0,
    )
    bulk_upload_max_image_bytes: int = Field(
        default=_FIVE_MEGABYTES,
        description="Maximum size accepted for a single product image",
        gt=0,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
