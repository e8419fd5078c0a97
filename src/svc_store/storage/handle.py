from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from svc_store.exceptions import StorageIOError, StorageLocationMissingError

logger = logging.getLogger(__name__)


class FileHandle(BaseModel):
    """A stored file: its generated name and, when known, the directory holding it.

    ``storage_location`` is environment specific and never serialized, so a
    handle loaded back from a record only knows its ``filename``. Re-attach
    the location with :meth:`with_location` before calling :meth:`remove`.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    storage_location: Optional[str] = Field(default=None, exclude=True)

    @property
    def path(self) -> Path:
        if self.storage_location is None:
            raise StorageLocationMissingError()
        return Path(self.storage_location) / self.filename

    def with_location(self, storage_location: str | os.PathLike[str]) -> "FileHandle":
        return self.model_copy(update={"storage_location": os.fspath(storage_location)})

    async def exists(self) -> bool:
        return await asyncio.to_thread(self.path.is_file)

    async def remove(self) -> None:
        """Delete the stored bytes. A handle is single-use for removal."""
        path = self.path
        try:
            await asyncio.to_thread(os.remove, path)
        except OSError as exc:
            raise StorageIOError(f"could not remove {path}: {exc.strerror or exc}") from exc
        logger.info(
            "Removed stored file",
            extra={"stored_filename": self.filename, "storage_location": self.storage_location},
        )


__all__ = ["FileHandle"]
