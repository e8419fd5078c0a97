from __future__ import annotations

from typing import Annotated, Any

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import PlainSerializer, PlainValidator, WithJsonSchema

from svc_store.exceptions import SerializationError


def to_object_id(value: Any) -> ObjectId:
    """Coerce a hex string (or an ObjectId) into an ObjectId.

    Raises SerializationError for anything that is not a valid 24-char hex id.
    """
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a fresh id
    if value is None:
        raise SerializationError("Invalid ObjectId: None")
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise SerializationError(f"Invalid ObjectId: {value!r}") from exc


def _validate(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValueError(f"Invalid ObjectId: {value!r}")


# ObjectId stays native for BSON (python mode) and becomes a hex string in JSON
PyObjectId = Annotated[
    ObjectId,
    PlainValidator(_validate),
    PlainSerializer(lambda v: str(v), return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "pattern": "^[0-9a-f]{24}$"}),
]


__all__ = ["PyObjectId", "to_object_id"]
