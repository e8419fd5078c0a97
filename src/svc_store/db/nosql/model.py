from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Self, TypeVar

from bson.errors import BSONError
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError
from pymongo.errors import PyMongoError

from svc_store.exceptions import NotFoundError, SerializationError, StoreError

from .options import AggregateOptions, FindOneOptions, FindOptions, as_kwargs
from .types import PyObjectId, to_object_id

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")

Filter = Optional[Mapping[str, Any]]


def _coll_name(collection: Any) -> Optional[str]:
    name = getattr(collection, "name", None)
    return name if isinstance(name, str) else None


def _as_id(value: Any) -> Any:
    # hex strings must match the stored ObjectId; other id types pass through
    if isinstance(value, str):
        return to_object_id(value)
    return value


async def _resolve(value: Any) -> Any:
    # motor hands back cursors directly; pymongo's async API wraps some in a coroutine
    if inspect.isawaitable(value):
        return await value
    return value


def _decode(adapter: TypeAdapter[Any], doc: Any) -> Any:
    try:
        return adapter.validate_python(doc)
    except ValidationError as exc:
        raise SerializationError(str(exc)) from exc


class Model(BaseModel):
    """Generic document access for a typed record stored in a MongoDB collection.

    Subclass with your fields; the collection handle is always passed in by the
    caller, this class never opens or owns a connection::

        class User(Model):
            email: str
            name: str

        uid = await User(email="a@b.c", name="A").insert(db.users)
        user = await User.get_by_id(uid, db.users)

    Reads can decode into a different shape than the record itself by passing
    ``result_type`` (any type pydantic can validate: another model, ``dict``,
    a TypedDict, ...), which is how projections and aggregations are typed.

    ``id`` maps to Mongo's ``_id``. It is ``None`` until the store assigns one,
    and no operation here writes it back onto an instance.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")

    # -- serialization ---------------------------------------------------

    def to_document(self) -> dict[str, Any]:
        """BSON-ready dict; omits ``_id`` when unset so the store assigns one."""
        exclude = {"id"} if self.id is None else None
        return self.model_dump(by_alias=True, exclude=exclude)

    def to_json(self, *, by_alias: bool = False) -> str:
        try:
            return self.model_dump_json(by_alias=by_alias)
        except PydanticSerializationError as exc:
            raise SerializationError(str(exc)) from exc

    @classmethod
    def _adapter(cls, result_type: Optional[type[Any]]) -> TypeAdapter[Any]:
        return TypeAdapter(result_type if result_type is not None else cls)

    # -- single document -------------------------------------------------

    @classmethod
    async def get_by_id(cls, id: Any, collection: "AsyncIOMotorCollection") -> Self:
        return await cls.get_one({"_id": _as_id(id)}, None, collection)

    @classmethod
    async def get_one(
        cls,
        filter: Filter,
        options: FindOneOptions | Mapping[str, Any] | None,
        collection: "AsyncIOMotorCollection",
    ) -> Self:
        try:
            doc = await collection.find_one(filter or {}, **as_kwargs(options))
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        except BSONError as exc:
            raise SerializationError(str(exc)) from exc
        if doc is None:
            raise NotFoundError()
        return _decode(cls._adapter(None), doc)

    @classmethod
    async def delete_by_id(cls, id: Any, collection: "AsyncIOMotorCollection") -> None:
        try:
            result = await collection.delete_one({"_id": _as_id(id)})
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        logger.debug(
            "delete_by_id %s matched=%s",
            id,
            getattr(result, "deleted_count", None),
            extra={"collection": _coll_name(collection)},
        )

    async def insert(self, collection: "AsyncIOMotorCollection") -> Any:
        try:
            result = await collection.insert_one(self.to_document())
        except (PyMongoError, BSONError, PydanticSerializationError) as exc:
            raise StoreError(str(exc)) from exc
        return result.inserted_id

    # -- many documents --------------------------------------------------

    @classmethod
    async def get(
        cls,
        filter: Filter,
        options: FindOptions | Mapping[str, Any] | None,
        collection: "AsyncIOMotorCollection",
        *,
        result_type: Optional[type[ResultT]] = None,
    ) -> list[ResultT]:
        """Run a find and decode every matched document, exhausting the cursor.

        Returns an empty list when nothing matches.
        """
        adapter = cls._adapter(result_type)
        items: list[Any] = []
        try:
            cursor = await _resolve(collection.find(filter or {}, **as_kwargs(options)))
            async for doc in cursor:
                items.append(_decode(adapter, doc))
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        except BSONError as exc:
            raise SerializationError(str(exc)) from exc
        return items

    @classmethod
    async def aggregate(
        cls,
        pipeline: Iterable[Mapping[str, Any]],
        options: AggregateOptions | Mapping[str, Any] | None,
        collection: "AsyncIOMotorCollection",
        *,
        result_type: Optional[type[ResultT]] = None,
    ) -> list[ResultT]:
        """Run an aggregation pipeline and decode each result document.

        An aggregation that yields nothing raises NotFoundError; use ``get``
        when zero results is a legitimate answer.
        """
        adapter = cls._adapter(result_type)
        items: list[Any] = []
        try:
            cursor = await _resolve(collection.aggregate(list(pipeline), **as_kwargs(options)))
            async for doc in cursor:
                items.append(_decode(adapter, doc))
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        except BSONError as exc:
            raise SerializationError(str(exc)) from exc
        if not items:
            raise NotFoundError()
        return items


__all__ = ["Model"]
