"""Shared error taxonomy for svc-store.

Every fallible operation in the library raises one of the classes below.
Underlying driver/filesystem/codec errors are chained as ``__cause__`` and
never escape on their own.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Optional


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    TOKEN_EXPIRED = "token_expired"
    INVALID_FILE = "invalid_file"
    FILE_TOO_LARGE = "file_too_large"
    STORAGE_LOCATION_MISSING = "storage_location_missing"
    STORE = "store_error"
    SERIALIZATION = "serialization_error"
    AUTH = "auth_error"
    IO = "io_error"

    @property
    def code(self) -> int:
        return _CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "ErrorKind":
        for kind, value in _CODES.items():
            if value == code:
                return kind
        raise ValueError(f"Unknown error code: {code}")


_CODES: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 1,
    ErrorKind.TOKEN_EXPIRED: 2,
    ErrorKind.INVALID_FILE: 3,
    ErrorKind.FILE_TOO_LARGE: 4,
    ErrorKind.STORAGE_LOCATION_MISSING: 5,
    ErrorKind.STORE: 50,
    ErrorKind.SERIALIZATION: 51,
    ErrorKind.AUTH: 52,
    ErrorKind.IO: 53,
}


class StoreKitError(Exception):
    """Base class for all svc-store errors."""

    kind: ErrorKind

    def __init__(self, details: Optional[str] = None):
        self.details = details
        super().__init__(self.message())

    @property
    def code(self) -> int:
        return self.kind.code

    def message(self) -> str:
        return self.details or self.kind.value.replace("_", " ")

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "code": self.code, "message": self.message()}


class NotFoundError(StoreKitError):
    kind = ErrorKind.NOT_FOUND

    def message(self) -> str:
        return "Not found"


class TokenExpiredError(StoreKitError):
    kind = ErrorKind.TOKEN_EXPIRED

    def message(self) -> str:
        return "Token expired"


class InvalidFileError(StoreKitError):
    kind = ErrorKind.INVALID_FILE

    def __init__(self, filename: Optional[str] = None):
        self.filename = filename
        super().__init__()

    def message(self) -> str:
        if self.filename is None:
            return "Invalid file"
        return f"Invalid file: {self.filename!r}"


class FileTooLargeError(StoreKitError):
    kind = ErrorKind.FILE_TOO_LARGE

    def __init__(self, max_size_bytes: int):
        self.max_size_bytes = max_size_bytes
        super().__init__()

    def message(self) -> str:
        return f"File exceeds the maximum size of {self.max_size_bytes} bytes"


class StorageLocationMissingError(StoreKitError):
    kind = ErrorKind.STORAGE_LOCATION_MISSING

    def message(self) -> str:
        return "File handle has no storage location"


class StoreError(StoreKitError):
    kind = ErrorKind.STORE

    def message(self) -> str:
        return f"Store error: {self.details}" if self.details else "Store error"


class SerializationError(StoreKitError):
    kind = ErrorKind.SERIALIZATION

    def message(self) -> str:
        return f"Serialization error: {self.details}" if self.details else "Serialization error"


class AuthError(StoreKitError):
    kind = ErrorKind.AUTH

    def message(self) -> str:
        return f"Auth error: {self.details}" if self.details else "Auth error"


class StorageIOError(StoreKitError):
    kind = ErrorKind.IO

    def message(self) -> str:
        return f"IO error: {self.details}" if self.details else "IO error"


__all__ = [
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
]
