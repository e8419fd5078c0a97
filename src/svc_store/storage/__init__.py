from .handle import FileHandle
from .ingest import copy_from_path, save_bytes, save_from_stream, save_upload
from .naming import generate_filename, get_extension
from .policy import IngestionPolicy
from .settings import StorageSettings, get_storage_settings
from .streams import ByteStream, IterableStream, UploadFileStream

__all__ = [
    "FileHandle",
    "IngestionPolicy",
    "StorageSettings",
    "get_storage_settings",
    "ByteStream",
    "IterableStream",
    "UploadFileStream",
    "save_from_stream",
    "save_upload",
    "save_bytes",
    "copy_from_path",
    "generate_filename",
    "get_extension",
]
