from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from svc_store.exceptions import FileTooLargeError, InvalidFileError

from .naming import get_extension

if TYPE_CHECKING:
    from .settings import StorageSettings

DEFAULT_CHUNK_SIZE = 64 * 1024


def _normalize_ext(ext: str) -> str:
    return ext.strip().lstrip(".").lower()


@dataclass(frozen=True)
class IngestionPolicy:
    """Where uploads go and what they may look like.

    Immutable; the builder methods return new policies, so a policy can be
    shared between concurrent requests::

        policy = IngestionPolicy().at("/uploads").allow("pdf").max_size(1 << 20)

    ``allowed_extensions=None`` accepts any extension (but a file must still
    have one); ``max_size_bytes=None`` disables the size cap.
    """

    storage_location: str = "."
    allowed_extensions: Optional[frozenset[str]] = None
    max_size_bytes: Optional[int] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "storage_location", os.fspath(self.storage_location))
        exts = self.allowed_extensions
        if exts is not None:
            # a bare "pdf" is one extension, not three letters
            if isinstance(exts, str):
                exts = (exts,)
            object.__setattr__(self, "allowed_extensions", frozenset(_normalize_ext(e) for e in exts))
        if self.max_size_bytes is not None and self.max_size_bytes < 0:
            raise ValueError("max_size_bytes must be >= 0")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")

    # builder steps
    def at(self, location: str | os.PathLike[str]) -> "IngestionPolicy":
        return replace(self, storage_location=os.fspath(location))

    def allow(self, *extensions: str) -> "IngestionPolicy":
        current = self.allowed_extensions or frozenset()
        return replace(self, allowed_extensions=current | {_normalize_ext(e) for e in extensions})

    def max_size(self, max_size_bytes: Optional[int]) -> "IngestionPolicy":
        return replace(self, max_size_bytes=max_size_bytes)

    def with_chunk_size(self, chunk_size: int) -> "IngestionPolicy":
        return replace(self, chunk_size=chunk_size)

    @classmethod
    def from_settings(cls, settings: "StorageSettings") -> "IngestionPolicy":
        return cls(
            storage_location=settings.location,
            allowed_extensions=(
                frozenset(settings.allowed_extensions)
                if settings.allowed_extensions is not None
                else None
            ),
            max_size_bytes=settings.max_size_bytes,
            chunk_size=settings.chunk_size,
        )

    # checks
    def check_extension(self, filename: Optional[str]) -> str:
        """Return the extension of ``filename`` or raise InvalidFileError."""
        if not filename:
            raise InvalidFileError(filename)
        ext = get_extension(filename)
        if ext is None:
            raise InvalidFileError(filename)
        if self.allowed_extensions is not None and ext.lower() not in self.allowed_extensions:
            raise InvalidFileError(filename)
        return ext

    def check_size(self, size: int) -> None:
        if self.max_size_bytes is not None and size > self.max_size_bytes:
            raise FileTooLargeError(self.max_size_bytes)

    def path_for(self, filename: str) -> Path:
        return Path(self.storage_location) / filename


__all__ = ["IngestionPolicy", "DEFAULT_CHUNK_SIZE"]
