from . import app, auth, db, storage

from .exceptions import (
    AuthError,
    ErrorKind,
    FileTooLargeError,
    InvalidFileError,
    NotFoundError,
    SerializationError,
    StorageIOError,
    StorageLocationMissingError,
    StoreError,
    StoreKitError,
    TokenExpiredError,
)
from .db.nosql import AggregateOptions, FindOneOptions, FindOptions, Model
from .storage import (
    FileHandle,
    IngestionPolicy,
    copy_from_path,
    save_bytes,
    save_from_stream,
    save_upload,
)

__all__ = [
    # Modules
    "app",
    "auth",
    "db",
    "storage",
    # Errors
    "ErrorKind",
    "StoreKitError",
    "NotFoundError",
    "TokenExpiredError",
    "InvalidFileError",
    "FileTooLargeError",
    "StorageLocationMissingError",
    "StoreError",
    "SerializationError",
    "AuthError",
    "StorageIOError",
    # Documents
    "Model",
    "FindOptions",
    "FindOneOptions",
    "AggregateOptions",
    # Files
    "FileHandle",
    "IngestionPolicy",
    "save_from_stream",
    "save_upload",
    "save_bytes",
    "copy_from_path",
]
