from .expressions import get_field, match, project, switch
from .model import Model
from .options import AggregateOptions, FindOneOptions, FindOptions
from .types import PyObjectId, to_object_id

__all__ = [
    "Model",
    "FindOptions",
    "FindOneOptions",
    "AggregateOptions",
    "PyObjectId",
    "to_object_id",
    "get_field",
    "switch",
    "match",
    "project",
]
