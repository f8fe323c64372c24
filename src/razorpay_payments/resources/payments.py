"""
Payments, payment downtimes and the payment-scoped refund endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import (
    expect_entity,
    optional,
    parse_notes,
    parse_optional_timestamp,
    parse_timestamp,
)
from ..core.ids import CardId, DowntimeId, OfferId, OrderId, PaymentId, RefundId
from .cards import Card, CardType
from .common import Collection, Currency, Filter, Notes, filter_payload
from .refunds import CreateRefund, Refund

__all__ = [
    "CapturePayment",
    "Downtime",
    "DowntimeFlow",
    "DowntimeInstruments",
    "DowntimeMethod",
    "DowntimeSeverity",
    "DowntimeStatus",
    "DowntimesAPI",
    "ListPayments",
    "ListPaymentsExpand",
    "Offer",
    "Payment",
    "PaymentAcquirerData",
    "PaymentEmiInfo",
    "PaymentExpand",
    "PaymentMethod",
    "PaymentRefundStatus",
    "PaymentStatus",
    "PaymentUpiInfo",
    "PaymentsAPI",
]


class PaymentStatus(str, Enum):
    CREATED = "created"
    AUTHORIZED = "authorized"
    CAPTURED = "captured"
    REFUNDED = "refunded"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    CARD = "card"
    NETBANKING = "netbanking"
    WALLET = "wallet"
    EMI = "emi"
    UPI = "upi"


class PaymentRefundStatus(str, Enum):
    PARTIAL = "partial"
    FULL = "full"


class PaymentExpand(str, Enum):
    CARD = "card"
    EMI = "emi"
    OFFERS = "offers"
    UPI = "upi"


class ListPaymentsExpand(str, Enum):
    CARD = "card"
    EMI = "emi"


@dataclass(frozen=True)
class Offer:
    id: OfferId

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Offer":
        return cls(id=OfferId(payload["id"]))


@dataclass(frozen=True)
class PaymentAcquirerData:
    rrn: Optional[str] = None
    authentication_reference_number: Optional[str] = None
    bank_transaction_id: Optional[str] = None
    auth_code: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Any) -> Optional["PaymentAcquirerData"]:
        # An empty acquirer_data object is sometimes sent as [].
        if payload is None or payload == []:
            return None
        return cls(
            rrn=payload.get("rrn"),
            authentication_reference_number=payload.get(
                "authentication_reference_number"
            ),
            bank_transaction_id=payload.get("bank_transaction_id"),
            auth_code=payload.get("auth_code"),
        )


@dataclass(frozen=True)
class PaymentUpiInfo:
    vpa: str
    payer_account_type: Optional[str] = None
    flow: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentUpiInfo":
        return cls(
            vpa=payload["vpa"],
            payer_account_type=payload.get("payer_account_type"),
            flow=payload.get("flow"),
        )


@dataclass(frozen=True)
class PaymentEmiInfo:
    issuer: str
    rate: int
    duration: int

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentEmiInfo":
        return cls(
            issuer=payload["issuer"],
            rate=int(payload["rate"]),
            duration=int(payload["duration"]),
        )


@dataclass(frozen=True)
class Payment:
    id: PaymentId
    amount: int
    currency: Currency
    status: PaymentStatus
    method: PaymentMethod
    created_at: datetime
    order_id: Optional[OrderId] = None
    description: Optional[str] = None
    international: bool = False
    refund_status: Optional[PaymentRefundStatus] = None
    amount_refunded: int = 0
    captured: bool = False
    email: Optional[str] = None
    contact: Optional[str] = None
    fee: Optional[int] = None
    tax: Optional[int] = None
    notes: Notes = field(default_factory=dict)
    card_id: Optional[CardId] = None
    card: Optional[Card] = None
    wallet: Optional[str] = None
    acquirer_data: Optional[PaymentAcquirerData] = None
    bank: Optional[str] = None
    upi: Optional[PaymentUpiInfo] = None
    vpa: Optional[str] = None
    emi: Optional[PaymentEmiInfo] = None
    offers: Optional[Collection[Offer]] = None
    error_code: Optional[str] = None
    error_description: Optional[str] = None
    error_source: Optional[str] = None
    error_reason: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Payment":
        expect_entity(payload, "payment")
        return cls(
            id=PaymentId(payload["id"]),
            amount=int(payload["amount"]),
            currency=Currency(payload["currency"]),
            status=PaymentStatus(payload["status"]),
            method=PaymentMethod(payload["method"]),
            created_at=parse_timestamp(payload["created_at"]),
            order_id=optional(OrderId, payload.get("order_id")),
            description=payload.get("description"),
            international=bool(payload.get("international", False)),
            refund_status=optional(PaymentRefundStatus, payload.get("refund_status")),
            amount_refunded=int(payload.get("amount_refunded") or 0),
            captured=bool(payload.get("captured", False)),
            email=payload.get("email"),
            contact=payload.get("contact"),
            fee=payload.get("fee"),
            tax=payload.get("tax"),
            notes=parse_notes(payload.get("notes")),
            card_id=optional(CardId, payload.get("card_id")),
            card=optional(Card.from_response, payload.get("card")),
            wallet=payload.get("wallet"),
            acquirer_data=PaymentAcquirerData.from_response(payload.get("acquirer_data")),
            bank=payload.get("bank"),
            upi=optional(PaymentUpiInfo.from_response, payload.get("upi")),
            vpa=payload.get("vpa"),
            emi=optional(PaymentEmiInfo.from_response, payload.get("emi")),
            offers=optional(
                Collection.decoder(Offer.from_response), payload.get("offers")
            ),
            error_code=payload.get("error_code"),
            error_description=payload.get("error_description"),
            error_source=payload.get("error_source"),
            error_reason=payload.get("error_reason"),
        )


@dataclass(frozen=True)
class CapturePayment:
    amount: int
    currency: Currency = Currency.INR

    def as_payload(self) -> Dict[str, Any]:
        return {"amount": self.amount, "currency": self.currency}


@dataclass(frozen=True)
class ListPayments:
    expand: Sequence[ListPaymentsExpand] = ()
    filter: Optional[Filter] = None

    def as_payload(self) -> Dict[str, Any]:
        payload = filter_payload(self.filter)
        payload["expand[]"] = list(self.expand)
        return payload


class DowntimeMethod(str, Enum):
    CARD = "card"
    UPI = "upi"
    NETBANKING = "netbanking"


class DowntimeStatus(str, Enum):
    SCHEDULED = "scheduled"
    STARTED = "started"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


class DowntimeSeverity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DowntimeFlow(str, Enum):
    COLLECT = "collect"
    INTENT = "intent"
    IN_APP = "in_app"


@dataclass(frozen=True)
class DowntimeInstruments:
    bank: Optional[str] = None
    network: Optional[str] = None
    issuer: Optional[str] = None
    psp: Optional[str] = None
    vpa_handle: Optional[str] = None
    card_type: Optional[CardType] = None

    @classmethod
    def from_response(cls, payload: Any) -> "DowntimeInstruments":
        if payload is None or payload == []:
            return cls()
        return cls(
            bank=payload.get("bank"),
            network=payload.get("network"),
            issuer=payload.get("issuer"),
            psp=payload.get("psp"),
            vpa_handle=payload.get("vpa_handle"),
            card_type=optional(CardType, payload.get("card_type")),
        )


@dataclass(frozen=True)
class Downtime:
    id: DowntimeId
    method: DowntimeMethod
    begin: datetime
    end: Optional[datetime]
    status: DowntimeStatus
    scheduled: bool
    severity: DowntimeSeverity
    instrument: DowntimeInstruments
    created_at: datetime
    updated_at: Optional[datetime] = None
    flow: Optional[DowntimeFlow] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Downtime":
        expect_entity(payload, "payment.downtime")
        return cls(
            id=DowntimeId(payload["id"]),
            method=DowntimeMethod(payload["method"]),
            begin=parse_timestamp(payload["begin"]),
            end=parse_optional_timestamp(payload.get("end")),
            status=DowntimeStatus(payload["status"]),
            scheduled=bool(payload.get("scheduled", False)),
            severity=DowntimeSeverity(payload["severity"]),
            instrument=DowntimeInstruments.from_response(payload.get("instrument")),
            created_at=parse_timestamp(payload["created_at"]),
            updated_at=parse_optional_timestamp(payload.get("updated_at")),
            flow=optional(DowntimeFlow, payload.get("flow")),
        )


class PaymentsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def capture(
        self,
        payment_id: Union[PaymentId, str],
        params: CapturePayment,
    ) -> Payment:
        payment_id = PaymentId.parse(payment_id)
        return self._api.post(
            RequestDescriptor(f"/payments/{payment_id}/capture", payload=params),
            Payment.from_response,
        )

    def fetch(
        self,
        payment_id: Union[PaymentId, str],
        expand: Sequence[PaymentExpand] = (),
    ) -> Payment:
        payment_id = PaymentId.parse(payment_id)
        return self._api.get(
            RequestDescriptor(
                f"/payments/{payment_id}",
                payload={"expand[]": list(expand)},
            ),
            Payment.from_response,
        )

    def list(self, params: Optional[ListPayments] = None) -> Collection[Payment]:
        return self._api.get(
            RequestDescriptor("/payments", payload=params),
            Collection.decoder(Payment.from_response),
        )

    def fetch_card(self, payment_id: Union[PaymentId, str]) -> Card:
        payment_id = PaymentId.parse(payment_id)
        return self._api.get(
            RequestDescriptor(f"/payments/{payment_id}/card"),
            Card.from_response,
        )

    def update(self, payment_id: Union[PaymentId, str], notes: Notes) -> Payment:
        payment_id = PaymentId.parse(payment_id)
        return self._api.patch(
            RequestDescriptor(f"/payments/{payment_id}", payload={"notes": notes}),
            Payment.from_response,
        )

    def refund(
        self,
        payment_id: Union[PaymentId, str],
        params: Optional[CreateRefund] = None,
    ) -> Refund:
        payment_id = PaymentId.parse(payment_id)
        return self._api.post(
            RequestDescriptor(
                f"/payments/{payment_id}/refund",
                payload=params or CreateRefund(),
            ),
            Refund.from_response,
        )

    def list_refunds(
        self,
        payment_id: Union[PaymentId, str],
        params: Optional[Filter] = None,
    ) -> Collection[Refund]:
        payment_id = PaymentId.parse(payment_id)
        return self._api.get(
            RequestDescriptor(f"/payments/{payment_id}/refunds", payload=params),
            Collection.decoder(Refund.from_response),
        )

    def fetch_refund(
        self,
        payment_id: Union[PaymentId, str],
        refund_id: Union[RefundId, str],
    ) -> Refund:
        payment_id = PaymentId.parse(payment_id)
        refund_id = RefundId.parse(refund_id)
        return self._api.get(
            RequestDescriptor(f"/payments/{payment_id}/refunds/{refund_id}"),
            Refund.from_response,
        )


class DowntimesAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def list(self) -> Collection[Downtime]:
        return self._api.get(
            RequestDescriptor("/payments/downtimes"),
            Collection.decoder(Downtime.from_response),
        )

    def fetch(self, downtime_id: Union[DowntimeId, str]) -> Downtime:
        downtime_id = DowntimeId.parse(downtime_id)
        return self._api.get(
            RequestDescriptor(f"/payments/downtimes/{downtime_id}"),
            Downtime.from_response,
        )
