from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from svc_store.db.nosql.mongo.session import dispose_mongo, initialize_mongo


def add_mongo(app: FastAPI, *, url: Optional[str] = None, db_name: Optional[str] = None) -> None:
    """Open the Mongo client on startup and close it on shutdown, composing with any existing lifespan."""
    existing = getattr(app.router, "lifespan_context", None)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        _app.state.mongo_db = await initialize_mongo(url, db_name)
        try:
            if existing:
                async with existing(_app):
                    yield
            else:
                yield
        finally:
            await dispose_mongo()

    app.router.lifespan_context = lifespan
