"""Filename helpers for stored uploads.

Extensions are handled WITHOUT the leading dot everywhere:
``get_extension("a.png") == "png"`` and ``generate_filename("png")`` appends
``".png"``. ``generate_filename`` also tolerates ``".png"`` so the two never
drift into a double separator.
"""

from __future__ import annotations

import secrets
import string
from datetime import datetime
from typing import Optional

PREFIX_LENGTH = 10
TIMESTAMP_FORMAT = "%Y-%m-%d--%H-%M-%S"

_ALPHABET = string.ascii_letters + string.digits


def get_extension(filename: str) -> Optional[str]:
    """Return the text after the last ``.`` of the final path segment.

    ``None`` when there is no dot, or nothing follows it (``"archive."``).
    Dotfiles count as an extension: ``".env"`` -> ``"env"``.
    """
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    _, sep, ext = name.rpartition(".")
    if not sep or not ext:
        return None
    return ext


def random_prefix(length: int = PREFIX_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_filename(extension: str, *, now: Optional[datetime] = None) -> str:
    """``<10 alphanumerics>-<YYYY-MM-DD--HH-MM-SS>.<extension>`` in local time."""
    ext = extension.lstrip(".")
    if not ext:
        raise ValueError("extension must not be empty")
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return f"{random_prefix()}-{stamp}.{ext}"


__all__ = ["PREFIX_LENGTH", "TIMESTAMP_FORMAT", "get_extension", "generate_filename", "random_prefix"]
