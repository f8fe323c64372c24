"""
Settlements to the merchant's bank account, their reconciliation report and
on-demand (instant) settlements.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import (
    expect_entity,
    optional,
    parse_notes,
    parse_optional_timestamp,
    parse_timestamp,
)
from ..core.errors import InvalidIdError
from ..core.ids import (
    AdjustmentId,
    DisputeId,
    InstantSettlementId,
    InstantSettlementPayoutId,
    OrderId,
    PaymentId,
    RefundId,
    SettlementId,
    TransferId,
)
from ..core.payloads import compact
from .cards import CardNetwork, CardType
from .common import Collection, Currency, Filter, Notes
from .payments import PaymentMethod

__all__ = [
    "CreateInstantSettlement",
    "FetchRecon",
    "InstantSettlement",
    "InstantSettlementPayout",
    "InstantSettlementPayoutStatus",
    "InstantSettlementStatus",
    "InstantSettlementsAPI",
    "Settlement",
    "SettlementRecon",
    "SettlementStatus",
    "SettlementType",
    "SettlementsAPI",
    "parse_recon_entity_id",
]

ReconEntityId = Union[PaymentId, RefundId, TransferId, AdjustmentId]

_RECON_ID_TYPES = (PaymentId, RefundId, TransferId, AdjustmentId)

_EXPAND_PAYOUTS = {"expand[]": "ondemand_payouts"}


def parse_recon_entity_id(value: str) -> ReconEntityId:
    """Pick the id type of a recon row from the prefix of ``value``."""
    for id_type in _RECON_ID_TYPES:
        if isinstance(value, str) and value.startswith(id_type.prefix):
            return id_type(value)
    raise InvalidIdError("SettlementReconEntityId", "pay_|rfnd_|trf_|adj_", value)


class SettlementStatus(str, Enum):
    CREATED = "created"
    PROCESSED = "processed"
    FAILED = "failed"


class SettlementType(str, Enum):
    PAYMENT = "payment"
    REFUND = "refund"
    TRANSFER = "transfer"
    ADJUSTMENT = "adjustment"


class InstantSettlementStatus(str, Enum):
    CREATED = "created"
    INITIATED = "initiated"
    PARTIALLY_PROCESSED = "partially_processed"
    PROCESSED = "processed"
    REVERSED = "reversed"


class InstantSettlementPayoutStatus(str, Enum):
    CREATED = "created"
    INITIATED = "initiated"
    PROCESSED = "processed"
    REVERSED = "reversed"


@dataclass(frozen=True)
class Settlement:
    id: SettlementId
    amount: int
    status: SettlementStatus
    fees: int
    tax: int
    utr: Optional[str]
    created_at: datetime

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Settlement":
        expect_entity(payload, "settlement")
        return cls(
            id=SettlementId(payload["id"]),
            amount=int(payload["amount"]),
            status=SettlementStatus(payload["status"]),
            fees=int(payload.get("fees") or 0),
            tax=int(payload.get("tax") or 0),
            utr=payload.get("utr"),
            created_at=parse_timestamp(payload["created_at"]),
        )


@dataclass(frozen=True)
class SettlementRecon:
    entity_id: ReconEntityId
    type: SettlementType
    debit: int
    credit: int
    amount: int
    currency: Currency
    fee: int
    tax: int
    on_hold: bool
    settled: bool
    created_at: datetime
    settled_at: Optional[datetime] = None
    settlement_id: Optional[SettlementId] = None
    description: Optional[str] = None
    notes: Notes = field(default_factory=dict)
    payment_id: Optional[PaymentId] = None
    settlement_utr: Optional[str] = None
    order_id: Optional[OrderId] = None
    order_receipt: Optional[str] = None
    method: Optional[PaymentMethod] = None
    card_network: Optional[CardNetwork] = None
    card_issuer: Optional[str] = None
    card_type: Optional[CardType] = None
    dispute_id: Optional[DisputeId] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "SettlementRecon":
        return cls(
            entity_id=parse_recon_entity_id(payload["entity_id"]),
            type=SettlementType(payload["type"]),
            debit=int(payload["debit"]),
            credit=int(payload["credit"]),
            amount=int(payload["amount"]),
            currency=Currency(payload["currency"]),
            fee=int(payload.get("fee") or 0),
            tax=int(payload.get("tax") or 0),
            on_hold=bool(payload["on_hold"]),
            settled=bool(payload["settled"]),
            created_at=parse_timestamp(payload["created_at"]),
            settled_at=parse_optional_timestamp(payload.get("settled_at")),
            settlement_id=optional(SettlementId, payload.get("settlement_id")),
            description=payload.get("description"),
            notes=parse_notes(payload.get("notes")),
            payment_id=optional(PaymentId, payload.get("payment_id")),
            settlement_utr=payload.get("settlement_utr"),
            order_id=optional(OrderId, payload.get("order_id")),
            order_receipt=payload.get("order_receipt"),
            method=optional(PaymentMethod, payload.get("method")),
            card_network=optional(CardNetwork, payload.get("card_network")),
            card_issuer=payload.get("card_issuer"),
            card_type=optional(CardType, payload.get("card_type")),
            dispute_id=optional(DisputeId, payload.get("dispute_id")),
        )


@dataclass(frozen=True)
class FetchRecon:
    year: int
    month: int
    day: Optional[int] = None
    count: Optional[int] = None
    skip: Optional[int] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "year": self.year,
                "month": self.month,
                "day": self.day,
                "count": self.count,
                "skip": self.skip,
            }
        )


@dataclass(frozen=True)
class InstantSettlementPayout:
    id: InstantSettlementPayoutId
    amount: int
    amount_settled: int
    fees: int
    tax: int
    status: InstantSettlementPayoutStatus
    initiated_at: Optional[datetime]
    created_at: datetime
    utr: Optional[str] = None
    processed_at: Optional[datetime] = None
    reversed_at: Optional[datetime] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "InstantSettlementPayout":
        expect_entity(payload, "settlement.ondemand_payout")
        return cls(
            id=InstantSettlementPayoutId(payload["id"]),
            amount=int(payload["amount"]),
            amount_settled=int(payload.get("amount_settled") or 0),
            fees=int(payload.get("fees") or 0),
            tax=int(payload.get("tax") or 0),
            status=InstantSettlementPayoutStatus(payload["status"]),
            initiated_at=parse_optional_timestamp(payload.get("initiated_at")),
            created_at=parse_timestamp(payload["created_at"]),
            utr=payload.get("utr"),
            processed_at=parse_optional_timestamp(payload.get("processed_at")),
            reversed_at=parse_optional_timestamp(payload.get("reversed_at")),
        )


@dataclass(frozen=True)
class InstantSettlement:
    id: InstantSettlementId
    amount_requested: int
    amount_settled: int
    amount_pending: int
    amount_reversed: int
    fees: int
    tax: int
    currency: Currency
    settle_full_balance: bool
    status: InstantSettlementStatus
    created_at: datetime
    description: Optional[str] = None
    notes: Notes = field(default_factory=dict)
    ondemand_payouts: Optional[Collection[InstantSettlementPayout]] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "InstantSettlement":
        expect_entity(payload, "settlement.ondemand")
        return cls(
            id=InstantSettlementId(payload["id"]),
            amount_requested=int(payload["amount_requested"]),
            amount_settled=int(payload.get("amount_settled") or 0),
            amount_pending=int(payload.get("amount_pending") or 0),
            amount_reversed=int(payload.get("amount_reversed") or 0),
            fees=int(payload.get("fees") or 0),
            tax=int(payload.get("tax") or 0),
            currency=Currency(payload["currency"]),
            settle_full_balance=bool(payload.get("settle_full_balance", False)),
            status=InstantSettlementStatus(payload["status"]),
            created_at=parse_timestamp(payload["created_at"]),
            description=payload.get("description"),
            notes=parse_notes(payload.get("notes")),
            ondemand_payouts=optional(
                Collection.decoder(InstantSettlementPayout.from_response),
                payload.get("ondemand_payouts"),
            ),
        )


@dataclass(frozen=True)
class CreateInstantSettlement:
    amount: int
    settle_full_balance: Optional[bool] = None
    description: Optional[str] = None
    notes: Optional[Notes] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "amount": self.amount,
                "settle_full_balance": self.settle_full_balance,
                "description": self.description,
                "notes": self.notes,
            }
        )


class SettlementsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def list(self, params: Optional[Filter] = None) -> Collection[Settlement]:
        return self._api.get(
            RequestDescriptor("/settlements", payload=params),
            Collection.decoder(Settlement.from_response),
        )

    def fetch(self, settlement_id: Union[SettlementId, str]) -> Settlement:
        settlement_id = SettlementId.parse(settlement_id)
        return self._api.get(
            RequestDescriptor(f"/settlements/{settlement_id}"),
            Settlement.from_response,
        )

    def fetch_recon(self, params: FetchRecon) -> Collection[SettlementRecon]:
        return self._api.get(
            RequestDescriptor("/settlements/recon/combined", payload=params),
            Collection.decoder(SettlementRecon.from_response),
        )


class InstantSettlementsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, params: CreateInstantSettlement) -> InstantSettlement:
        return self._api.post(
            RequestDescriptor("/settlements/ondemand", payload=params),
            InstantSettlement.from_response,
        )

    def list(self, expand_payouts: bool = False) -> Collection[InstantSettlement]:
        return self._api.get(
            RequestDescriptor(
                "/settlements/ondemand",
                payload=_EXPAND_PAYOUTS if expand_payouts else None,
            ),
            Collection.decoder(InstantSettlement.from_response),
        )

    def fetch(
        self,
        settlement_id: Union[InstantSettlementId, str],
        expand_payouts: bool = False,
    ) -> InstantSettlement:
        settlement_id = InstantSettlementId.parse(settlement_id)
        return self._api.get(
            RequestDescriptor(
                f"/settlements/ondemand/{settlement_id}",
                payload=_EXPAND_PAYOUTS if expand_payouts else None,
            ),
            InstantSettlement.from_response,
        )
