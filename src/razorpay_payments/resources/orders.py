"""
Orders: the amount a customer is expected to pay, created before checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import expect_entity, optional, parse_notes, parse_optional_timestamp
from ..core.ids import OfferId, OrderId
from ..core.payloads import bool_as_int, compact
from .common import Collection, Currency, Filter, Notes, filter_payload
from .payments import Payment

__all__ = [
    "CreateOrder",
    "ListOrders",
    "Order",
    "OrderBankAccount",
    "OrderExpand",
    "OrderStatus",
    "OrdersAPI",
]


class OrderStatus(str, Enum):
    CREATED = "created"
    ATTEMPTED = "attempted"
    PAID = "paid"


class OrderExpand(str, Enum):
    PAYMENTS = "payments"
    PAYMENTS_CARD = "payments.card"
    TRANSFERS = "transfers"
    VIRTUAL_ACCOUNT = "virtual_account"


@dataclass(frozen=True)
class Order:
    id: OrderId
    amount: int
    currency: Currency
    status: OrderStatus
    amount_paid: int = 0
    amount_due: Optional[int] = None
    partial_payment: Optional[bool] = None
    receipt: Optional[str] = None
    offer_id: Optional[OfferId] = None
    payments: Optional[Collection[Payment]] = None
    notes: Notes = field(default_factory=dict)
    attempts: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Order":
        expect_entity(payload, "order")
        amount = int(payload["amount"])
        amount_paid = int(payload.get("amount_paid") or 0)
        amount_due = payload.get("amount_due")
        return cls(
            id=OrderId(payload["id"]),
            amount=amount,
            currency=Currency(payload["currency"]),
            status=OrderStatus(payload["status"]),
            amount_paid=amount_paid,
            amount_due=int(amount_due) if amount_due is not None else amount - amount_paid,
            partial_payment=payload.get("partial_payment"),
            receipt=payload.get("receipt"),
            offer_id=optional(OfferId, payload.get("offer_id")),
            payments=optional(
                Collection.decoder(Payment.from_response), payload.get("payments")
            ),
            notes=parse_notes(payload.get("notes")),
            attempts=int(payload.get("attempts") or 0),
            created_at=parse_optional_timestamp(payload.get("created_at")),
        )


@dataclass(frozen=True)
class OrderBankAccount:
    account_number: str
    name: str
    ifsc: str

    def as_payload(self) -> Dict[str, Any]:
        return {
            "account_number": self.account_number,
            "name": self.name,
            "ifsc": self.ifsc,
        }


@dataclass(frozen=True)
class CreateOrder:
    amount: int
    currency: Currency = Currency.INR
    receipt: Optional[str] = None
    notes: Optional[Notes] = None
    partial_payment: Optional[bool] = None
    bank_account: Optional[OrderBankAccount] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "amount": self.amount,
                "currency": self.currency,
                "receipt": self.receipt,
                "notes": self.notes or None,
                "partial_payment": self.partial_payment,
                "bank_account": self.bank_account,
            }
        )


@dataclass(frozen=True)
class ListOrders:
    filter: Optional[Filter] = None
    authorized: Optional[bool] = None
    receipt: Optional[str] = None
    expand: Sequence[OrderExpand] = ()

    def as_payload(self) -> Dict[str, Any]:
        payload = filter_payload(self.filter)
        payload.update(
            compact(
                {
                    "authorized": bool_as_int(self.authorized),
                    "receipt": self.receipt,
                }
            )
        )
        payload["expand[]"] = list(self.expand)
        return payload


class OrdersAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, params: CreateOrder) -> Order:
        return self._api.post(
            RequestDescriptor("/orders", payload=params),
            Order.from_response,
        )

    def list(self, params: Optional[ListOrders] = None) -> Collection[Order]:
        return self._api.get(
            RequestDescriptor("/orders", payload=params),
            Collection.decoder(Order.from_response),
        )

    def fetch(self, order_id: Union[OrderId, str]) -> Order:
        order_id = OrderId.parse(order_id)
        return self._api.get(
            RequestDescriptor(f"/orders/{order_id}"),
            Order.from_response,
        )

    def list_payments(self, order_id: Union[OrderId, str]) -> Collection[Payment]:
        order_id = OrderId.parse(order_id)
        return self._api.get(
            RequestDescriptor(f"/orders/{order_id}/payments"),
            Collection.decoder(Payment.from_response),
        )

    def update(self, order_id: Union[OrderId, str], notes: Notes) -> Order:
        order_id = OrderId.parse(order_id)
        return self._api.patch(
            RequestDescriptor(f"/orders/{order_id}", payload={"notes": notes}),
            Order.from_response,
        )
