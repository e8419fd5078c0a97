# Public DB API exports
from .settings import MongoSettings, get_mongo_settings
from .nosql import (
    AggregateOptions,
    FindOneOptions,
    FindOptions,
    Model,
    PyObjectId,
    to_object_id,
)

__all__ = [
    "MongoSettings",
    "get_mongo_settings",
    "Model",
    "FindOptions",
    "FindOneOptions",
    "AggregateOptions",
    "PyObjectId",
    "to_object_id",
]
