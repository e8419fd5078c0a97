from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """
    Upload storage settings.

    Env support:
      STORAGE_LOCATION, STORAGE_ALLOWED_EXTENSIONS (JSON list, e.g. '["png","jpg"]'),
      STORAGE_MAX_SIZE_BYTES, STORAGE_CHUNK_SIZE
    """

    location: str = Field(default=".")
    allowed_extensions: Optional[list[str]] = Field(default=None)
    max_size_bytes: Optional[int] = Field(default=None, ge=0)
    chunk_size: int = Field(default=64 * 1024, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_storage_settings(**kwargs) -> StorageSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return StorageSettings(**filtered)
