"""
Invoices and the line items, customers and addresses they embed.

An invoice moves ``draft`` -> ``issued`` -> ``partially_paid``/``paid``, or
ends ``cancelled``/``expired``/``deleted``.
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
)
from ..core.envelope import discard
from ..core.ids import AddressId, CustomerId, InvoiceId, OrderId, PaymentId
from ..core.payloads import bool_as_int, compact
from .common import Collection, Currency, Notes

__all__ = [
    "Address",
    "AddressType",
    "CreateInvoice",
    "CustomerDetails",
    "Invoice",
    "InvoiceAddress",
    "InvoiceCustomer",
    "InvoiceLineItem",
    "InvoiceMessageStatus",
    "InvoiceNotifyMedium",
    "InvoiceStatus",
    "InvoicesAPI",
    "LineItem",
    "ListInvoices",
    "UpdateInvoice",
]


class AddressType(str, Enum):
    BILLING = "billing_address"
    SHIPPING = "shipping_address"


@dataclass(frozen=True)
class Address:
    id: AddressId
    type: AddressType
    primary: bool
    line1: str
    city: str
    zipcode: str
    state: str
    country: str
    line2: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Address":
        return cls(
            id=AddressId(payload["id"]),
            type=AddressType(payload["type"]),
            primary=bool(payload.get("primary", False)),
            line1=payload["line1"],
            city=payload["city"],
            zipcode=payload["zipcode"],
            state=payload["state"],
            country=payload["country"],
            line2=payload.get("line2"),
        )


@dataclass(frozen=True)
class LineItem:
    id: str
    name: str
    amount: int
    currency: Currency
    quantity: int
    item_id: Optional[str] = None
    description: Optional[str] = None
    type: str = "invoice"

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "LineItem":
        return cls(
            id=payload["id"],
            name=payload["name"],
            amount=int(payload["amount"]),
            currency=Currency(payload["currency"]),
            quantity=int(payload.get("quantity") or 1),
            item_id=payload.get("item_id"),
            description=payload.get("description"),
            type=payload.get("type", "invoice"),
        )


@dataclass(frozen=True)
class CustomerDetails:
    id: Optional[str]
    name: Optional[str]
    email: Optional[str]
    contact: Optional[str]
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "CustomerDetails":
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            email=payload.get("email"),
            contact=payload.get("contact"),
            billing_address=optional(Address.from_response, payload.get("billing_address")),
            shipping_address=optional(
                Address.from_response, payload.get("shipping_address")
            ),
        )


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    ISSUED = "issued"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    DELETED = "deleted"


class InvoiceMessageStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"


class InvoiceNotifyMedium(str, Enum):
    SMS = "sms"
    EMAIL = "email"


@dataclass(frozen=True)
class Invoice:
    id: InvoiceId
    status: InvoiceStatus
    amount: int
    currency: Currency
    type: str = "invoice"
    invoice_number: Optional[str] = None
    customer_id: Optional[CustomerId] = None
    customer_details: Optional[CustomerDetails] = None
    order_id: Optional[OrderId] = None
    payment_id: Optional[PaymentId] = None
    line_items: List[LineItem] = field(default_factory=list)
    expire_by: Optional[datetime] = None
    issued_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    expired_at: Optional[datetime] = None
    sms_status: Optional[InvoiceMessageStatus] = None
    email_status: Optional[InvoiceMessageStatus] = None
    partial_payment: bool = False
    amount_paid: int = 0
    amount_due: int = 0
    description: Optional[str] = None
    notes: Notes = field(default_factory=dict)
    short_url: Optional[str] = None
    date: Optional[datetime] = None
    terms: Optional[str] = None
    comment: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Invoice":
        expect_entity(payload, "invoice")
        return cls(
            id=InvoiceId(payload["id"]),
            status=InvoiceStatus(payload["status"]),
            amount=int(payload["amount"]),
            currency=Currency(payload["currency"]),
            type=payload.get("type", "invoice"),
            invoice_number=payload.get("invoice_number"),
            customer_id=optional(CustomerId, payload.get("customer_id")),
            customer_details=optional(
                CustomerDetails.from_response, payload.get("customer_details")
            ),
            order_id=optional(OrderId, payload.get("order_id")),
            payment_id=optional(PaymentId, payload.get("payment_id")),
            line_items=parse_list(LineItem.from_response, payload.get("line_items")),
            expire_by=parse_optional_timestamp(payload.get("expire_by")),
            issued_at=parse_optional_timestamp(payload.get("issued_at")),
            paid_at=parse_optional_timestamp(payload.get("paid_at")),
            cancelled_at=parse_optional_timestamp(payload.get("cancelled_at")),
            expired_at=parse_optional_timestamp(payload.get("expired_at")),
            sms_status=optional(InvoiceMessageStatus, payload.get("sms_status")),
            email_status=optional(InvoiceMessageStatus, payload.get("email_status")),
            partial_payment=bool(payload.get("partial_payment", False)),
            amount_paid=int(payload.get("amount_paid") or 0),
            amount_due=int(payload.get("amount_due") or 0),
            description=payload.get("description"),
            notes=parse_notes(payload.get("notes")),
            short_url=payload.get("short_url"),
            date=parse_optional_timestamp(payload.get("date")),
            terms=payload.get("terms"),
            comment=payload.get("comment"),
        )


@dataclass(frozen=True)
class InvoiceAddress:
    line1: str
    city: str
    zipcode: str
    state: str
    country: str
    line2: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "line1": self.line1,
                "line2": self.line2,
                "city": self.city,
                "zipcode": self.zipcode,
                "state": self.state,
                "country": self.country,
            }
        )


@dataclass(frozen=True)
class InvoiceCustomer:
    name: str
    email: Optional[str] = None
    contact: Optional[str] = None
    billing_address: Optional[InvoiceAddress] = None
    shipping_address: Optional[InvoiceAddress] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "name": self.name,
                "email": self.email,
                "contact": self.contact,
                "billing_address": self.billing_address,
                "shipping_address": self.shipping_address,
            }
        )


@dataclass(frozen=True)
class InvoiceLineItem:
    item_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[Currency] = None
    quantity: Optional[int] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "item_id": self.item_id,
                "name": self.name,
                "description": self.description,
                "amount": self.amount,
                "currency": self.currency,
                "quantity": self.quantity,
            }
        )


@dataclass(frozen=True)
class UpdateInvoice:
    description: Optional[str] = None
    draft: Optional[bool] = None
    customer_id: Optional[CustomerId] = None
    customer: Optional[InvoiceCustomer] = None
    line_items: Optional[Sequence[InvoiceLineItem]] = None
    expire_by: Optional[datetime] = None
    sms_notify: Optional[bool] = None
    email_notify: Optional[bool] = None
    partial_payment: Optional[bool] = None
    currency: Optional[Currency] = None
    notes: Optional[Notes] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "type": "invoice",
                "description": self.description,
                "draft": bool_as_int(self.draft),
                "customer_id": self.customer_id,
                "customer": self.customer,
                "line_items": list(self.line_items) if self.line_items is not None else None,
                "expire_by": self.expire_by,
                "sms_notify": bool_as_int(self.sms_notify),
                "email_notify": bool_as_int(self.email_notify),
                "partial_payment": self.partial_payment,
                "currency": self.currency,
                "notes": self.notes,
            }
        )


class CreateInvoice(UpdateInvoice):
    """Same fields as an update; every one of them is optional on create too."""


@dataclass(frozen=True)
class ListInvoices:
    payment_id: Optional[PaymentId] = None
    receipt: Optional[str] = None
    customer_id: Optional[CustomerId] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "payment_id": self.payment_id,
                "receipt": self.receipt,
                "customer_id": self.customer_id,
            }
        )


class InvoicesAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, params: CreateInvoice) -> Invoice:
        return self._api.post(
            RequestDescriptor("/invoices", payload=params),
            Invoice.from_response,
        )

    def update(self, invoice_id: Union[InvoiceId, str], params: UpdateInvoice) -> Invoice:
        invoice_id = InvoiceId.parse(invoice_id)
        return self._api.patch(
            RequestDescriptor(f"/invoices/{invoice_id}", payload=params),
            Invoice.from_response,
        )

    def issue(self, invoice_id: Union[InvoiceId, str]) -> Invoice:
        invoice_id = InvoiceId.parse(invoice_id)
        return self._api.post(
            RequestDescriptor(f"/invoices/{invoice_id}/issue"),
            Invoice.from_response,
        )

    def delete(self, invoice_id: Union[InvoiceId, str]) -> None:
        invoice_id = InvoiceId.parse(invoice_id)
        self._api.delete(RequestDescriptor(f"/invoices/{invoice_id}"), discard)

    def cancel(self, invoice_id: Union[InvoiceId, str]) -> Invoice:
        invoice_id = InvoiceId.parse(invoice_id)
        return self._api.post(
            RequestDescriptor(f"/invoices/{invoice_id}/cancel"),
            Invoice.from_response,
        )

    def fetch(self, invoice_id: Union[InvoiceId, str]) -> Invoice:
        invoice_id = InvoiceId.parse(invoice_id)
        return self._api.get(
            RequestDescriptor(f"/invoices/{invoice_id}"),
            Invoice.from_response,
        )

    def list(self, params: Optional[ListInvoices] = None) -> Collection[Invoice]:
        return self._api.get(
            RequestDescriptor("/invoices", payload=params),
            Collection.decoder(Invoice.from_response),
        )

    def notify(
        self,
        invoice_id: Union[InvoiceId, str],
        medium: InvoiceNotifyMedium,
    ) -> bool:
        """Resend the invoice link; returns the service's ``success`` flag."""
        invoice_id = InvoiceId.parse(invoice_id)
        medium = InvoiceNotifyMedium(medium)
        return self._api.post(
            RequestDescriptor(f"/invoices/{invoice_id}/notify_by/{medium.value}"),
            lambda body: bool(body["success"]),
        )
