from __future__ import annotations

import pytest
from bson import ObjectId

from svc_store.db.nosql import (
    AggregateOptions,
    FindOneOptions,
    FindOptions,
    get_field,
    match,
    project,
    switch,
    to_object_id,
)
from svc_store.db.nosql.options import as_kwargs
from svc_store.exceptions import SerializationError


class TestOptions:
    def test_empty_options_send_nothing(self):
        assert FindOptions().to_kwargs() == {}
        assert FindOneOptions().to_kwargs() == {}
        assert AggregateOptions().to_kwargs() == {}
        assert as_kwargs(None) == {}

    def test_find_options(self):
        opts = FindOptions(projection={"a": 1}, sort=[("a", 1)], skip=5, limit=10, batch_size=100)

        assert opts.to_kwargs() == {
            "projection": {"a": 1},
            "sort": [("a", 1)],
            "skip": 5,
            "limit": 10,
            "batch_size": 100,
        }

    def test_extra_passes_through(self):
        opts = FindOneOptions(extra={"hint": "a_1"})

        assert opts.to_kwargs() == {"hint": "a_1"}

    def test_mapping_is_accepted_as_is(self):
        assert as_kwargs({"limit": 1}) == {"limit": 1}

    def test_aggregate_options_use_camel_case(self):
        opts = AggregateOptions(allow_disk_use=False, batch_size=10, let={"x": 1})

        assert opts.to_kwargs() == {"allowDiskUse": False, "batchSize": 10, "let": {"x": 1}}


class TestExpressions:
    def test_get_field(self):
        assert get_field("price", "$$item") == {"$getField": {"field": "price", "input": "$$item"}}

    def test_switch_with_default(self):
        expr = switch([({"$gt": ["$n", 10]}, "big"), ({"$gt": ["$n", 0]}, "small")], default="none")

        assert expr == {
            "$switch": {
                "branches": [
                    {"case": {"$gt": ["$n", 10]}, "then": "big"},
                    {"case": {"$gt": ["$n", 0]}, "then": "small"},
                ],
                "default": "none",
            }
        }

    def test_switch_without_default(self):
        assert "default" not in switch([(True, 1)])["$switch"]

    def test_switch_with_null_default(self):
        assert switch([(True, 1)], default=None)["$switch"]["default"] is None

    def test_switch_requires_a_branch(self):
        with pytest.raises(ValueError):
            switch([])

    def test_stage_helpers(self):
        assert match({"a": 1}) == {"$match": {"a": 1}}
        assert project(a=1, _id=0) == {"$project": {"a": 1, "_id": 0}}


class TestObjectIds:
    def test_parse_hex(self):
        oid = ObjectId()

        assert to_object_id(str(oid)) == oid
        assert to_object_id(oid) is oid

    @pytest.mark.parametrize("value", ["nope", "", None, 123])
    def test_invalid(self, value):
        with pytest.raises(SerializationError) as exc_info:
            to_object_id(value)

        assert "Invalid ObjectId" in str(exc_info.value)
