"""Small builders for aggregation expressions that are tedious to write by hand."""

from __future__ import annotations

from typing import Any, Iterable, Mapping


def get_field(field: Any, input: Any) -> dict[str, Any]:
    return {"$getField": {"field": field, "input": input}}


_UNSET: Any = object()


def switch(branches: Iterable[tuple[Any, Any]], default: Any = _UNSET) -> dict[str, Any]:
    """Build a ``$switch`` from ``(case, then)`` pairs.

    ``default`` is only emitted when given, ``None`` included; without it Mongo
    errors at runtime if no branch matches, which is sometimes what you want.
    """
    body: dict[str, Any] = {"branches": [{"case": case, "then": then} for case, then in branches]}
    if not body["branches"]:
        raise ValueError("$switch needs at least one branch")
    if default is not _UNSET:
        body["default"] = default
    return {"$switch": body}


def match(filter: Mapping[str, Any]) -> dict[str, Any]:
    return {"$match": dict(filter)}


def project(**fields: Any) -> dict[str, Any]:
    return {"$project": fields}


__all__ = ["get_field", "switch", "match", "project"]
