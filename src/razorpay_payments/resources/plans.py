"""
Subscription plans: a billing period plus the item charged each cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import expect_entity, parse_notes, parse_timestamp
from ..core.ids import PlanId
from ..core.payloads import compact
from .common import Collection, Currency, Filter, Notes
from .items import Item

__all__ = ["CreatePlan", "CreatePlanItem", "Plan", "PlanPeriod", "PlansAPI"]


class PlanPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Plan:
    id: PlanId
    interval: int
    period: PlanPeriod
    item: Item
    created_at: datetime
    notes: Notes = field(default_factory=dict)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Plan":
        expect_entity(payload, "plan")
        return cls(
            id=PlanId(payload["id"]),
            interval=int(payload["interval"]),
            period=PlanPeriod(payload["period"]),
            item=Item.from_response(payload["item"]),
            created_at=parse_timestamp(payload["created_at"]),
            notes=parse_notes(payload.get("notes")),
        )


@dataclass(frozen=True)
class CreatePlanItem:
    name: str
    amount: int
    currency: Currency = Currency.INR
    description: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "amount": self.amount,
            "currency": self.currency,
            "description": self.description,
        }


@dataclass(frozen=True)
class CreatePlan:
    item: CreatePlanItem
    period: PlanPeriod = PlanPeriod.MONTHLY
    # Number of periods between charges.
    interval: int = 1
    notes: Optional[Notes] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "interval": self.interval,
                "period": self.period,
                "notes": self.notes,
                "item": self.item,
            }
        )


class PlansAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, params: CreatePlan) -> Plan:
        return self._api.post(
            RequestDescriptor("/plans", payload=params),
            Plan.from_response,
        )

    def list(self, params: Optional[Filter] = None) -> Collection[Plan]:
        return self._api.get(
            RequestDescriptor("/plans", payload=params),
            Collection.decoder(Plan.from_response),
        )

    def fetch(self, plan_id: Union[PlanId, str]) -> Plan:
        plan_id = PlanId.parse(plan_id)
        return self._api.get(RequestDescriptor(f"/plans/{plan_id}"), Plan.from_response)
