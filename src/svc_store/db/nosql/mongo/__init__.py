from .add import add_mongo
from .session import (
    dispose_mongo,
    get_collection,
    get_mongo_db,
    initialize_mongo,
    ping_mongo,
)

__all__ = [
    "add_mongo",
    "initialize_mongo",
    "dispose_mongo",
    "get_mongo_db",
    "get_collection",
    "ping_mongo",
]
