from __future__ import annotations

from typing import AsyncIterable, AsyncIterator, Iterable, Optional, Protocol, runtime_checkable

from starlette.datastructures import UploadFile

from svc_store.exceptions import StorageIOError

from .policy import DEFAULT_CHUNK_SIZE


@runtime_checkable
class ByteStream(Protocol):
    """Incoming content: a declared filename plus byte chunks, readable once."""

    @property
    def filename(self) -> Optional[str]: ...

    def chunks(self) -> AsyncIterator[bytes]: ...


class _ConsumeOnce:
    _consumed = False

    def _claim(self) -> None:
        if self._consumed:
            raise StorageIOError("stream has already been consumed")
        self._consumed = True


class UploadFileStream(_ConsumeOnce):
    """Adapts a Starlette/FastAPI ``UploadFile`` (one multipart field)."""

    def __init__(self, upload: UploadFile, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._upload = upload
        self._chunk_size = chunk_size

    @property
    def filename(self) -> Optional[str]:
        return self._upload.filename

    async def chunks(self) -> AsyncIterator[bytes]:
        self._claim()
        while True:
            try:
                chunk = await self._upload.read(self._chunk_size)
            except (OSError, ValueError) as exc:
                raise StorageIOError(f"upload read failed: {exc}") from exc
            if not chunk:
                break
            yield chunk


class IterableStream(_ConsumeOnce):
    """Wraps any sync or async iterable of bytes under a declared filename."""

    def __init__(self, filename: Optional[str], source: Iterable[bytes] | AsyncIterable[bytes]):
        self._filename = filename
        self._source = source

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    async def chunks(self) -> AsyncIterator[bytes]:
        self._claim()
        if isinstance(self._source, AsyncIterable):
            async for chunk in self._source:
                yield bytes(chunk)
        else:
            for chunk in self._source:
                yield bytes(chunk)


__all__ = ["ByteStream", "UploadFileStream", "IterableStream"]
