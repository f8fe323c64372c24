"""
Addons: one-off charges attached to a subscription's next invoice.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import expect_entity, optional, parse_timestamp
from ..core.envelope import discard
from ..core.ids import AddonId, InvoiceId, SubscriptionId
from .common import Collection, Filter
from .items import CreateItem, Item

__all__ = ["Addon", "AddonsAPI", "CreateAddon"]


@dataclass(frozen=True)
class Addon:
    id: AddonId
    item: Item
    quantity: int
    created_at: datetime
    subscription_id: str
    invoice_id: Optional[InvoiceId] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Addon":
        expect_entity(payload, "addon")
        return cls(
            id=AddonId(payload["id"]),
            item=Item.from_response(payload["item"]),
            quantity=int(payload["quantity"]),
            created_at=parse_timestamp(payload["created_at"]),
            subscription_id=payload["subscription_id"],
            invoice_id=optional(InvoiceId, payload.get("invoice_id")),
        )


@dataclass(frozen=True)
class CreateAddon:
    item: CreateItem
    quantity: int = 1

    def as_payload(self) -> Dict[str, Any]:
        return {"item": self.item, "quantity": self.quantity}


class AddonsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(
        self, subscription_id: Union[SubscriptionId, str], params: CreateAddon
    ) -> Addon:
        subscription_id = SubscriptionId.parse(subscription_id)
        return self._api.post(
            RequestDescriptor(f"/subscriptions/{subscription_id}/addons", payload=params),
            Addon.from_response,
        )

    def list(self, params: Optional[Filter] = None) -> Collection[Addon]:
        return self._api.get(
            RequestDescriptor("/addons", payload=params),
            Collection.decoder(Addon.from_response),
        )

    def fetch(self, addon_id: Union[AddonId, str]) -> Addon:
        addon_id = AddonId.parse(addon_id)
        return self._api.get(
            RequestDescriptor(f"/addons/{addon_id}"),
            Addon.from_response,
        )

    def delete(self, addon_id: Union[AddonId, str]) -> None:
        addon_id = AddonId.parse(addon_id)
        self._api.delete(RequestDescriptor(f"/addons/{addon_id}"), discard)
