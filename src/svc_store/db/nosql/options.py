from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence


Sort = Sequence[tuple[str, int]]


@dataclass(frozen=True)
class FindOneOptions:
    projection: Optional[Mapping[str, Any]] = None
    sort: Optional[Sort] = None
    skip: Optional[int] = None
    max_time_ms: Optional[int] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_kwargs(self) -> dict[str, Any]:
        kwargs = {
            "projection": dict(self.projection) if self.projection is not None else None,
            "sort": list(self.sort) if self.sort is not None else None,
            "skip": self.skip,
            "max_time_ms": self.max_time_ms,
        }
        return {**{k: v for k, v in kwargs.items() if v is not None}, **self.extra}


@dataclass(frozen=True)
class FindOptions(FindOneOptions):
    limit: Optional[int] = None
    batch_size: Optional[int] = None

    def to_kwargs(self) -> dict[str, Any]:
        kwargs = super().to_kwargs()
        if self.limit is not None:
            kwargs["limit"] = self.limit
        if self.batch_size is not None:
            kwargs["batch_size"] = self.batch_size
        return kwargs


@dataclass(frozen=True)
class AggregateOptions:
    allow_disk_use: Optional[bool] = None
    batch_size: Optional[int] = None
    max_time_ms: Optional[int] = None
    let: Optional[Mapping[str, Any]] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_kwargs(self) -> dict[str, Any]:
        kwargs = {
            "allowDiskUse": self.allow_disk_use,
            "batchSize": self.batch_size,
            "maxTimeMS": self.max_time_ms,
            "let": dict(self.let) if self.let is not None else None,
        }
        return {**{k: v for k, v in kwargs.items() if v is not None}, **self.extra}


def as_kwargs(options: Any) -> dict[str, Any]:
    """Normalize an options value (dataclass, mapping or None) into driver kwargs."""
    if options is None:
        return {}
    if isinstance(options, Mapping):
        return dict(options)
    return options.to_kwargs()
