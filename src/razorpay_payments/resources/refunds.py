"""
Refunds issued against captured payments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import expect_entity, optional, parse_notes, parse_timestamp
from ..core.ids import BatchId, PaymentId, RefundId
from ..core.payloads import compact
from .common import Collection, Currency, Filter, Notes

__all__ = [
    "CreateRefund",
    "Refund",
    "RefundSpeed",
    "RefundStatus",
    "RefundsAPI",
]


class RefundSpeed(str, Enum):
    NORMAL = "normal"
    OPTIMUM = "optimum"
    INSTANT = "instant"


class RefundStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    FAILED = "failed"


@dataclass(frozen=True)
class Refund:
    id: RefundId
    amount: int
    currency: Currency
    payment_id: PaymentId
    status: RefundStatus
    created_at: datetime
    speed: Optional[RefundSpeed] = None
    batch_id: Optional[BatchId] = None
    notes: Notes = field(default_factory=dict)
    receipt: Optional[str] = None
    # Undocumented shape; kept as the raw JSON value.
    acquirer_data: Any = None
    speed_requested: Optional[RefundSpeed] = None
    speed_processed: Optional[RefundSpeed] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Refund":
        expect_entity(payload, "refund")
        return cls(
            id=RefundId(payload["id"]),
            amount=int(payload["amount"]),
            currency=Currency(payload["currency"]),
            payment_id=PaymentId(payload["payment_id"]),
            status=RefundStatus(payload["status"]),
            created_at=parse_timestamp(payload["created_at"]),
            speed=optional(RefundSpeed, payload.get("speed")),
            batch_id=optional(BatchId, payload.get("batch_id")),
            notes=parse_notes(payload.get("notes")),
            receipt=payload.get("receipt"),
            acquirer_data=payload.get("acquirer_data"),
            speed_requested=optional(RefundSpeed, payload.get("speed_requested")),
            speed_processed=optional(RefundSpeed, payload.get("speed_processed")),
        )


@dataclass(frozen=True)
class CreateRefund:
    amount: Optional[int] = None
    speed: Optional[RefundSpeed] = None
    notes: Optional[Notes] = None
    receipt: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "amount": self.amount,
                "speed": self.speed,
                "notes": self.notes,
                "receipt": self.receipt,
            }
        )


class RefundsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def list(self, params: Optional[Filter] = None) -> Collection[Refund]:
        return self._api.get(
            RequestDescriptor("/refunds", payload=params),
            Collection.decoder(Refund.from_response),
        )

    def fetch(self, refund_id: Union[RefundId, str]) -> Refund:
        refund_id = RefundId.parse(refund_id)
        return self._api.get(
            RequestDescriptor(f"/refunds/{refund_id}"),
            Refund.from_response,
        )

    def update(self, refund_id: Union[RefundId, str], notes: Notes) -> Refund:
        refund_id = RefundId.parse(refund_id)
        return self._api.patch(
            RequestDescriptor(f"/refunds/{refund_id}", payload={"notes": notes}),
            Refund.from_response,
        )
