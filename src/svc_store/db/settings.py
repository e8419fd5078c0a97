from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoSettings(BaseSettings):
    """
    MongoDB settings.

    Env support:
      - MONGO_URL, MONGO_DB_NAME, MONGO_SERVER_SELECTION_TIMEOUT_MS
      - Also accepts DATABASE_URL as a fallback for convenience.
    """

    url: Optional[str] = Field(default=None)
    db_name: Optional[str] = Field(default=None)
    server_selection_timeout_ms: int = Field(default=5000)

    model_config = SettingsConfigDict(
        env_prefix="MONGO_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def resolved_url(self) -> str:
        url = self.url or os.getenv("DATABASE_URL")
        if not url:
            raise ValueError("MONGO_URL (or DATABASE_URL) must be set for MongoDB connectivity")
        if not url.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(f"Not a MongoDB connection string: {url!r}")
        return url


@lru_cache
def get_mongo_settings(**kwargs) -> MongoSettings:
    # Only include kwargs that are not None, so defaults in MongoSettings are used
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MongoSettings(**filtered)
