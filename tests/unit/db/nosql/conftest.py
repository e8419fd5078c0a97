"""
NoSQL test fixtures: an in-memory stand-in for a motor collection.
"""

from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from svc_store.db.nosql import Model


class FakeCursor:
    """Async-iterable cursor; optionally raises ``error`` after ``fail_after`` docs."""

    def __init__(self, docs: List[Dict[str, Any]], *, error: Optional[Exception] = None, fail_after: int = 0):
        self._docs = docs
        self._error = error
        self._fail_after = fail_after

    def __aiter__(self):
        return self._iter()

    async def _iter(self):
        for i, doc in enumerate(self._docs):
            if self._error is not None and i >= self._fail_after:
                raise self._error
            yield copy.deepcopy(doc)
        if self._error is not None and len(self._docs) <= self._fail_after:
            raise self._error


class FakeCollection:
    """Implements the slice of the motor collection API the Model uses."""

    def __init__(self, name: str = "records"):
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.aggregate_results: List[Dict[str, Any]] = []
        self.calls: List[tuple[str, tuple, dict]] = []
        self.cursor_error: Optional[Exception] = None

    def _match(self, filter: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [d for d in self.docs if all(d.get(k) == v for k, v in filter.items())]

    @staticmethod
    def _project(doc: Dict[str, Any], projection: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if not projection:
            return doc
        keep = {k for k, v in projection.items() if v}
        out = {k: v for k, v in doc.items() if k in keep}
        if projection.get("_id", 1):
            out["_id"] = doc.get("_id")
        return out

    async def insert_one(self, doc: Dict[str, Any]):
        self.calls.append(("insert_one", (doc,), {}))
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", ObjectId())
        if any(d["_id"] == doc["_id"] for d in self.docs):
            raise DuplicateKeyError(f"E11000 duplicate key error: {doc['_id']}")
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, filter: Dict[str, Any], **kwargs):
        self.calls.append(("find_one", (filter,), kwargs))
        matches = self._match(filter)
        if not matches:
            return None
        return copy.deepcopy(self._project(matches[0], kwargs.get("projection")))

    def find(self, filter: Dict[str, Any], **kwargs):
        self.calls.append(("find", (filter,), kwargs))
        docs = [self._project(d, kwargs.get("projection")) for d in self._match(filter)]
        if kwargs.get("limit"):
            docs = docs[: kwargs["limit"]]
        return FakeCursor(docs, error=self.cursor_error, fail_after=1 if self.cursor_error else 0)

    async def delete_one(self, filter: Dict[str, Any]):
        self.calls.append(("delete_one", (filter,), {}))
        for i, d in enumerate(self.docs):
            if all(d.get(k) == v for k, v in filter.items()):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    def aggregate(self, pipeline, **kwargs):
        self.calls.append(("aggregate", (pipeline,), kwargs))
        return FakeCursor(self.aggregate_results, error=self.cursor_error)


class Book(Model):
    title: str
    author: str
    pages: int = 0
    tags: List[str] = []


class BookTitle(Model):
    title: str


@pytest.fixture
def collection():
    return FakeCollection("books")


@pytest.fixture
def book_model():
    return Book


@pytest.fixture
def sample_books():
    return [
        Book(title="Dune", author="Herbert", pages=412, tags=["scifi"]),
        Book(title="Emma", author="Austen", pages=474, tags=["classic"]),
        Book(title="Children of Dune", author="Herbert", pages=444, tags=["scifi"]),
    ]


@pytest.fixture
def title_model():
    return BookTitle
