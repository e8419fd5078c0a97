"""Validate incoming content and persist it under a generated filename.

All functions are stateless; the policy is passed in by value. Disk work runs
in a worker thread so the event loop keeps serving other requests.

Collision avoidance relies solely on the random prefix + timestamp in
:func:`generate_filename`; there is no existence check before create.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional

from starlette.datastructures import UploadFile

from svc_store.exceptions import FileTooLargeError, StorageIOError, StoreKitError

from .handle import FileHandle
from .naming import generate_filename
from .policy import IngestionPolicy
from .streams import ByteStream, UploadFileStream

logger = logging.getLogger(__name__)


def _handle(policy: IngestionPolicy, filename: str) -> FileHandle:
    return FileHandle(filename=filename, storage_location=policy.storage_location)


async def _create(path: Path) -> BinaryIO:
    # exclusive create: a name collision fails loudly instead of overwriting
    try:
        return await asyncio.to_thread(open, path, "xb")
    except OSError as exc:
        raise StorageIOError(f"could not create {path}: {exc.strerror or exc}") from exc


async def _discard(path: Path) -> None:
    try:
        await asyncio.to_thread(path.unlink, missing_ok=True)
    except OSError:
        logger.warning("Could not remove partial file %s", path, exc_info=True)


async def save_from_stream(policy: IngestionPolicy, stream: ByteStream) -> FileHandle:
    """Stream ``stream`` to disk chunk by chunk, in arrival order.

    The declared filename must carry an allowed extension. When the running
    total would pass ``policy.max_size_bytes`` the offending chunk is not
    written, the partial file is deleted and FileTooLargeError is raised.
    Read or write faults inside the loop also remove the partial file and
    surface as StorageIOError. Task cancellation is not cleaned up.
    """
    ext = policy.check_extension(stream.filename)
    filename = generate_filename(ext)
    path = policy.path_for(filename)

    fh = await _create(path)
    written = 0
    try:
        try:
            async for chunk in stream.chunks():
                written += len(chunk)
                policy.check_size(written)
                await asyncio.to_thread(fh.write, chunk)
        finally:
            await asyncio.to_thread(fh.close)
    except FileTooLargeError:
        await _discard(path)
        logger.warning(
            "Rejected upload %r: exceeds %s bytes",
            stream.filename,
            policy.max_size_bytes,
            extra={"storage_location": policy.storage_location},
        )
        raise
    except StoreKitError:
        await _discard(path)
        raise
    except OSError as exc:
        await _discard(path)
        raise StorageIOError(f"write to {path} failed: {exc.strerror or exc}") from exc
    except Exception as exc:
        await _discard(path)
        raise StorageIOError(f"stream for {stream.filename!r} failed: {exc}") from exc

    logger.info(
        "Stored upload %r (%d bytes)",
        stream.filename,
        written,
        extra={"stored_filename": filename, "storage_location": policy.storage_location},
    )
    return _handle(policy, filename)


async def save_upload(policy: IngestionPolicy, upload: UploadFile) -> FileHandle:
    """Convenience for a FastAPI ``UploadFile``, read in ``policy.chunk_size`` pieces."""
    return await save_from_stream(policy, UploadFileStream(upload, policy.chunk_size))


async def save_bytes(policy: IngestionPolicy, data: bytes, filename: str) -> FileHandle:
    """Write an in-memory buffer in one go; the size cap is checked before writing."""
    ext = policy.check_extension(filename)
    policy.check_size(len(data))
    stored = generate_filename(ext)
    path = policy.path_for(stored)

    fh = await _create(path)

    def _write() -> None:
        with fh:
            fh.write(data)

    try:
        await asyncio.to_thread(_write)
    except OSError as exc:
        await _discard(path)
        raise StorageIOError(f"write to {path} failed: {exc.strerror or exc}") from exc

    logger.info(
        "Stored buffer %r (%d bytes)",
        filename,
        len(data),
        extra={"stored_filename": stored, "storage_location": policy.storage_location},
    )
    return _handle(policy, stored)


async def copy_from_path(
    policy: IngestionPolicy,
    source_path: str | os.PathLike[str],
    filename: Optional[str] = None,
) -> FileHandle:
    """Copy an existing file into storage. The source is left untouched.

    The extension is taken from ``filename`` when given, else from the
    source's own name.
    """
    source = Path(source_path)
    ext = policy.check_extension(filename if filename is not None else source.name)

    try:
        size = (await asyncio.to_thread(source.stat)).st_size
    except OSError as exc:
        raise StorageIOError(f"cannot read {source}: {exc.strerror or exc}") from exc
    policy.check_size(size)

    stored = generate_filename(ext)
    path = policy.path_for(stored)
    fh = await _create(path)

    def _copy() -> int:
        # st_size can understate the content (pipes, /proc, growing files)
        copied = 0
        with fh, open(source, "rb") as src:
            while chunk := src.read(policy.chunk_size):
                copied += len(chunk)
                policy.check_size(copied)
                fh.write(chunk)
        return copied

    try:
        copied = await asyncio.to_thread(_copy)
    except FileTooLargeError:
        await _discard(path)
        logger.warning(
            "Rejected copy of %s: exceeds %s bytes",
            source,
            policy.max_size_bytes,
            extra={"storage_location": policy.storage_location},
        )
        raise
    except OSError as exc:
        await _discard(path)
        raise StorageIOError(f"copy {source} -> {path} failed: {exc.strerror or exc}") from exc

    logger.info(
        "Copied %s into storage (%d bytes)",
        source,
        copied,
        extra={"stored_filename": stored, "storage_location": policy.storage_location},
    )
    return _handle(policy, stored)


__all__ = ["save_from_stream", "save_upload", "save_bytes", "copy_from_path"]
