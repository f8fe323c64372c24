"""
Customers, reusable across orders, invoices and subscriptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import parse_notes, parse_timestamp
from ..core.ids import CustomerId
from ..core.payloads import bool_as_int, compact
from .common import Collection, Notes

__all__ = [
    "CreateCustomer",
    "Customer",
    "CustomersAPI",
    "ListCustomers",
    "UpdateCustomer",
]


@dataclass(frozen=True)
class Customer:
    id: CustomerId
    name: str
    created_at: datetime
    contact: Optional[str] = None
    email: Optional[str] = None
    gstin: Optional[str] = None
    notes: Notes = field(default_factory=dict)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Customer":
        return cls(
            id=CustomerId(payload["id"]),
            name=payload["name"],
            created_at=parse_timestamp(payload["created_at"]),
            contact=payload.get("contact"),
            email=payload.get("email"),
            gstin=payload.get("gstin"),
            notes=parse_notes(payload.get("notes")),
        )


@dataclass(frozen=True)
class CreateCustomer:
    name: str
    contact: Optional[str] = None
    email: Optional[str] = None
    # Return the existing customer instead of failing on a duplicate.
    fail_existing: Optional[bool] = None
    gstin: Optional[str] = None
    notes: Optional[Notes] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "name": self.name,
                "contact": self.contact,
                "email": self.email,
                "fail_existing": bool_as_int(self.fail_existing),
                "gstin": self.gstin,
                "notes": self.notes,
            }
        )


@dataclass(frozen=True)
class UpdateCustomer:
    name: Optional[str] = None
    email: Optional[str] = None
    contact: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {"name": self.name, "email": self.email, "contact": self.contact}
        )


@dataclass(frozen=True)
class ListCustomers:
    count: Optional[int] = None
    skip: Optional[int] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact({"count": self.count, "skip": self.skip})


class CustomersAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, params: CreateCustomer) -> Customer:
        return self._api.post(
            RequestDescriptor("/customers", payload=params),
            Customer.from_response,
        )

    def update(
        self, customer_id: Union[CustomerId, str], params: UpdateCustomer
    ) -> Customer:
        customer_id = CustomerId.parse(customer_id)
        return self._api.put(
            RequestDescriptor(f"/customers/{customer_id}", payload=params),
            Customer.from_response,
        )

    def list(self, params: Optional[ListCustomers] = None) -> Collection[Customer]:
        return self._api.get(
            RequestDescriptor("/customers", payload=params),
            Collection.decoder(Customer.from_response),
        )

    def fetch(self, customer_id: Union[CustomerId, str]) -> Customer:
        customer_id = CustomerId.parse(customer_id)
        return self._api.get(
            RequestDescriptor(f"/customers/{customer_id}"),
            Customer.from_response,
        )
