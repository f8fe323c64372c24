"""
Recurring subscriptions built on plans.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import (
    expect_entity,
    optional,
    parse_list,
    parse_notes,
    parse_optional_timestamp,
    parse_timestamp,
)
from ..core.ids import CustomerId, OfferId, PlanId, SubscriptionId
from ..core.payloads import bool_as_int, compact
from .addons import Addon
from .common import Collection, Currency, Filter, Notes, filter_payload

__all__ = [
    "CreateSubscription",
    "CreateSubscriptionAddon",
    "CreateSubscriptionAddonItem",
    "CreateSubscriptionNotifyInfo",
    "ListSubscriptions",
    "Subscription",
    "SubscriptionChangeSchedule",
    "SubscriptionStatus",
    "SubscriptionsAPI",
    "UpdateSubscription",
]


class SubscriptionStatus(str, Enum):
    CREATED = "created"
    AUTHENTICATED = "authenticated"
    ACTIVE = "active"
    PENDING = "pending"
    HALTED = "halted"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    EXPIRED = "expired"


class SubscriptionChangeSchedule(str, Enum):
    NOW = "now"
    CYCLE_END = "cycle_end"


@dataclass(frozen=True)
class Subscription:
    id: SubscriptionId
    plan_id: PlanId
    status: SubscriptionStatus
    total_count: int
    quantity: int
    customer_id: Optional[CustomerId] = None
    customer_notify: bool = True
    start_at: Optional[datetime] = None
    notes: Notes = field(default_factory=dict)
    addons: List[Addon] = field(default_factory=list)
    paid_count: int = 0
    current_start: Optional[datetime] = None
    current_end: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    charge_at: Optional[datetime] = None
    auth_attempts: int = 0
    expire_by: Optional[datetime] = None
    offer_id: Optional[OfferId] = None
    short_url: Optional[str] = None
    has_scheduled_changes: bool = False
    schedule_change_at: Optional[SubscriptionChangeSchedule] = None
    remaining_count: Optional[int] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Subscription":
        expect_entity(payload, "subscription")
        remaining = payload.get("remaining_count")
        return cls(
            id=SubscriptionId(payload["id"]),
            plan_id=PlanId(payload["plan_id"]),
            status=SubscriptionStatus(payload["status"]),
            total_count=int(payload["total_count"]),
            quantity=int(payload.get("quantity") or 1),
            customer_id=optional(CustomerId, payload.get("customer_id")),
            customer_notify=bool(payload.get("customer_notify", True)),
            start_at=parse_optional_timestamp(payload.get("start_at")),
            notes=parse_notes(payload.get("notes")),
            addons=parse_list(Addon.from_response, payload.get("addons")),
            paid_count=int(payload.get("paid_count") or 0),
            current_start=parse_optional_timestamp(payload.get("current_start")),
            current_end=parse_optional_timestamp(payload.get("current_end")),
            ended_at=parse_optional_timestamp(payload.get("ended_at")),
            charge_at=parse_optional_timestamp(payload.get("charge_at")),
            auth_attempts=int(payload.get("auth_attempts") or 0),
            expire_by=parse_optional_timestamp(payload.get("expire_by")),
            offer_id=optional(OfferId, payload.get("offer_id")),
            short_url=payload.get("short_url"),
            has_scheduled_changes=bool(payload.get("has_scheduled_changes", False)),
            schedule_change_at=optional(
                SubscriptionChangeSchedule, payload.get("schedule_change_at")
            ),
            # The service sends this one as a string.
            remaining_count=int(remaining) if remaining is not None else None,
        )


@dataclass(frozen=True)
class CreateSubscriptionAddonItem:
    name: str
    amount: int
    currency: Currency = Currency.INR

    def as_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "amount": self.amount, "currency": self.currency}


@dataclass(frozen=True)
class CreateSubscriptionAddon:
    item: CreateSubscriptionAddonItem

    def as_payload(self) -> Dict[str, Any]:
        return {"item": self.item}


@dataclass(frozen=True)
class CreateSubscriptionNotifyInfo:
    notify_email: str
    notify_phone: str

    def as_payload(self) -> Dict[str, Any]:
        return {"notify_email": self.notify_email, "notify_phone": self.notify_phone}


@dataclass(frozen=True)
class CreateSubscription:
    plan_id: PlanId
    total_count: int = 1
    quantity: Optional[int] = None
    start_at: Optional[datetime] = None
    expire_by: Optional[datetime] = None
    customer_notify: Optional[bool] = None
    addons: Sequence[CreateSubscriptionAddon] = ()
    offer_id: Optional[OfferId] = None
    notes: Optional[Notes] = None
    notify_info: Optional[CreateSubscriptionNotifyInfo] = None

    def as_payload(self) -> Dict[str, Any]:
        payload = compact(
            {
                "plan_id": PlanId.parse(self.plan_id),
                "total_count": self.total_count,
                "quantity": self.quantity,
                "start_at": self.start_at,
                "expire_by": self.expire_by,
                "customer_notify": bool_as_int(self.customer_notify),
                "offer_id": self.offer_id,
                "notes": self.notes,
                "notify_info": self.notify_info,
            }
        )
        payload["addons"] = list(self.addons)
        return payload


@dataclass(frozen=True)
class ListSubscriptions:
    plan_id: Optional[PlanId] = None
    filter: Optional[Filter] = None

    def as_payload(self) -> Dict[str, Any]:
        payload = filter_payload(self.filter)
        payload.update(compact({"plan_id": self.plan_id}))
        return payload


@dataclass(frozen=True)
class UpdateSubscription:
    plan_id: Optional[PlanId] = None
    offer_id: Optional[OfferId] = None
    quantity: Optional[int] = None
    remaining_count: Optional[int] = None
    start_at: Optional[datetime] = None
    schedule_change_at: SubscriptionChangeSchedule = SubscriptionChangeSchedule.NOW
    customer_notify: Optional[bool] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "plan_id": self.plan_id,
                "offer_id": self.offer_id,
                "quantity": self.quantity,
                "remaining_count": self.remaining_count,
                "start_at": self.start_at,
                "schedule_change_at": self.schedule_change_at,
                "customer_notify": self.customer_notify,
            }
        )


class SubscriptionsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, params: CreateSubscription) -> Subscription:
        return self._api.post(
            RequestDescriptor("/subscriptions", payload=params),
            Subscription.from_response,
        )

    def fetch(self, subscription_id: Union[SubscriptionId, str]) -> Subscription:
        subscription_id = SubscriptionId.parse(subscription_id)
        return self._api.get(
            RequestDescriptor(f"/subscriptions/{subscription_id}"),
            Subscription.from_response,
        )

    def list(
        self, params: Optional[ListSubscriptions] = None
    ) -> Collection[Subscription]:
        return self._api.get(
            RequestDescriptor("/subscriptions", payload=params),
            Collection.decoder(Subscription.from_response),
        )

    def cancel(
        self,
        subscription_id: Union[SubscriptionId, str],
        cancel_at_cycle_end: bool = False,
    ) -> Subscription:
        subscription_id = SubscriptionId.parse(subscription_id)
        return self._api.post(
            RequestDescriptor(
                f"/subscriptions/{subscription_id}/cancel",
                payload={"cancel_at_cycle_end": bool_as_int(cancel_at_cycle_end)},
            ),
            Subscription.from_response,
        )

    def update(
        self,
        subscription_id: Union[SubscriptionId, str],
        params: UpdateSubscription,
    ) -> Subscription:
        subscription_id = SubscriptionId.parse(subscription_id)
        return self._api.patch(
            RequestDescriptor(f"/subscriptions/{subscription_id}", payload=params),
            Subscription.from_response,
        )

    def fetch_pending_update(
        self, subscription_id: Union[SubscriptionId, str]
    ) -> Subscription:
        subscription_id = SubscriptionId.parse(subscription_id)
        return self._api.get(
            RequestDescriptor(
                f"/subscriptions/{subscription_id}/retrieve_scheduled_changes"
            ),
            Subscription.from_response,
        )

    def cancel_scheduled_update(
        self, subscription_id: Union[SubscriptionId, str]
    ) -> Subscription:
        subscription_id = SubscriptionId.parse(subscription_id)
        return self._api.post(
            RequestDescriptor(
                f"/subscriptions/{subscription_id}/cancel_scheduled_changes"
            ),
            Subscription.from_response,
        )

    def pause(self, subscription_id: Union[SubscriptionId, str]) -> Subscription:
        subscription_id = SubscriptionId.parse(subscription_id)
        return self._api.post(
            RequestDescriptor(
                f"/subscriptions/{subscription_id}/pause",
                payload={"pause_at": "now"},
            ),
            Subscription.from_response,
        )

    def resume(self, subscription_id: Union[SubscriptionId, str]) -> Subscription:
        subscription_id = SubscriptionId.parse(subscription_id)
        return self._api.post(
            RequestDescriptor(
                f"/subscriptions/{subscription_id}/resume",
                payload={"resume_at": "now"},
            ),
            Subscription.from_response,
        )
