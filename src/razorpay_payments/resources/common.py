"""
Types shared by several resources.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, Generic, Iterator, List, Mapping, Optional, TypeVar

from ..core.codec import expect_entity, parse_list
from ..core.payloads import compact, to_timestamp

__all__ = ["Collection", "Currency", "Filter", "Notes"]

T = TypeVar("T")

Notes = Dict[str, str]


class Currency(str, Enum):
    INR = "INR"
    USD = "USD"
    EUR = "EUR"
    SGD = "SGD"


@dataclass(frozen=True)
class Collection(Generic[T]):
    entity: str
    count: int
    items: List[T]

    @classmethod
    def from_response(
        cls,
        payload: Mapping[str, Any],
        item_decoder: Callable[[Any], T],
    ) -> "Collection[T]":
        expect_entity(payload, "collection")
        items = parse_list(item_decoder, payload["items"])
        return cls(
            entity=payload.get("entity", "collection"),
            count=int(payload.get("count", len(items))),
            items=items,
        )

    @classmethod
    def decoder(cls, item_decoder: Callable[[Any], T]) -> Callable[[Any], "Collection[T]"]:
        return partial(cls.from_response, item_decoder=item_decoder)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Filter:
    """Pagination and time-window options accepted by list endpoints."""

    from_: Optional[datetime] = None
    to: Optional[datetime] = None
    count: Optional[int] = None
    skip: Optional[int] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "from": to_timestamp(self.from_) if self.from_ is not None else None,
                "to": to_timestamp(self.to) if self.to is not None else None,
                "count": self.count,
                "skip": self.skip,
            }
        )


def filter_payload(options: Optional[Filter]) -> Dict[str, Any]:
    return options.as_payload() if options is not None else {}
