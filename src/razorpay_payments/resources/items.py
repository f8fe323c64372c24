"""
Catalogue items, also embedded in plans and addons.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import optional, parse_optional_timestamp
from ..core.envelope import discard
from ..core.ids import ItemId
from ..core.payloads import compact
from .common import Collection, Currency, Filter, filter_payload

__all__ = [
    "CreateItem",
    "Item",
    "ItemType",
    "ItemsAPI",
    "ListItems",
    "UpdateItem",
]


class ItemType(str, Enum):
    PLAN = "plan"
    ADDON = "addon"
    INVOICE = "invoice"


@dataclass(frozen=True)
class Item:
    id: ItemId
    name: str
    active: bool
    amount: int
    unit_amount: int
    currency: Currency
    description: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    type: Optional[ItemType]
    unit: Optional[int] = None
    tax_inclusive: Optional[bool] = None
    hsn_code: Optional[int] = None
    sac_code: Optional[int] = None
    tax_rate: Optional[str] = None
    tax_id: Optional[str] = None
    tax_group_id: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Item":
        amount = int(payload["amount"])
        return cls(
            id=ItemId(payload["id"]),
            name=payload["name"],
            active=bool(payload.get("active", True)),
            amount=amount,
            unit_amount=int(payload.get("unit_amount", amount)),
            currency=Currency(payload["currency"]),
            description=payload.get("description"),
            created_at=parse_optional_timestamp(payload.get("created_at")),
            updated_at=parse_optional_timestamp(payload.get("updated_at")),
            type=optional(ItemType, payload.get("type")),
            unit=payload.get("unit"),
            tax_inclusive=payload.get("tax_inclusive"),
            hsn_code=payload.get("hsn_code"),
            sac_code=payload.get("sac_code"),
            tax_rate=optional(str, payload.get("tax_rate")),
            tax_id=payload.get("tax_id"),
            tax_group_id=payload.get("tax_group_id"),
        )


@dataclass(frozen=True)
class CreateItem:
    name: str
    amount: int
    currency: Currency = Currency.INR
    description: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "name": self.name,
                "description": self.description,
                "amount": self.amount,
                "currency": self.currency,
            }
        )


@dataclass(frozen=True)
class UpdateItem:
    name: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[Currency] = None
    active: Optional[bool] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "name": self.name,
                "description": self.description,
                "amount": self.amount,
                "currency": self.currency,
                "active": self.active,
            }
        )


@dataclass(frozen=True)
class ListItems:
    active: Optional[bool] = None
    filter: Optional[Filter] = None

    def as_payload(self) -> Dict[str, Any]:
        payload = filter_payload(self.filter)
        payload.update(compact({"active": self.active}))
        return payload


class ItemsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, params: CreateItem) -> Item:
        return self._api.post(
            RequestDescriptor("/items", payload=params),
            Item.from_response,
        )

    def fetch(self, item_id: Union[ItemId, str]) -> Item:
        item_id = ItemId.parse(item_id)
        return self._api.get(RequestDescriptor(f"/items/{item_id}"), Item.from_response)

    def list(self, params: Optional[ListItems] = None) -> Collection[Item]:
        return self._api.get(
            RequestDescriptor("/items", payload=params),
            Collection.decoder(Item.from_response),
        )

    def update(self, item_id: Union[ItemId, str], params: UpdateItem) -> Item:
        item_id = ItemId.parse(item_id)
        return self._api.patch(
            RequestDescriptor(f"/items/{item_id}", payload=params),
            Item.from_response,
        )

    def delete(self, item_id: Union[ItemId, str]) -> None:
        item_id = ItemId.parse(item_id)
        self._api.delete(RequestDescriptor(f"/items/{item_id}"), discard)
