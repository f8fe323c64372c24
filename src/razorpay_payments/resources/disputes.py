"""
Disputes raised by customers against captured payments, and the evidence
submitted to contest them.
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
    parse_optional_timestamp,
    parse_timestamp,
)
from ..core.ids import DisputeId, PaymentId
from ..core.payloads import compact
from .common import Collection, Currency

__all__ = [
    "ContestDispute",
    "ContestDisputeAction",
    "Dispute",
    "DisputeEvidence",
    "DisputePhase",
    "DisputeStatus",
    "DisputesAPI",
    "OtherDisputeEvidence",
]

PROOF_FIELDS = (
    "shipping_proof",
    "billing_proof",
    "cancellation_proof",
    "customer_communication",
    "proof_of_service",
    "explanation_letter",
    "refund_confirmation",
    "access_activity_log",
    "refund_cancellation_policy",
    "term_and_conditions",
)


class DisputeStatus(str, Enum):
    OPEN = "open"
    UNDER_REVIEW = "under_review"
    WON = "won"
    LOST = "lost"
    CLOSED = "closed"


class DisputePhase(str, Enum):
    FRAUD = "fraud"
    RETRIEVAL = "retrieval"
    CHARGEBACK = "chargeback"
    PRE_ARBITRATION = "pre_arbitration"
    ARBITRATION = "arbitration"


class ContestDisputeAction(str, Enum):
    DRAFT = "draft"
    SUBMIT = "submit"


@dataclass(frozen=True)
class OtherDisputeEvidence:
    type: str
    document_ids: List[str]

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "OtherDisputeEvidence":
        return cls(type=payload["type"], document_ids=list(payload["document_ids"]))

    def as_payload(self) -> Dict[str, Any]:
        return {"type": self.type, "document_ids": list(self.document_ids)}


def _document_ids(value: Any) -> Optional[List[str]]:
    return optional(lambda ids: parse_list(str, ids), value)


@dataclass(frozen=True)
class DisputeEvidence:
    """
    Evidence attached to a dispute. Each proof field lists the ids of
    uploaded documents, or is ``None`` when nothing was submitted for it.
    """

    amount: int
    summary: Optional[str]
    shipping_proof: Optional[List[str]] = None
    billing_proof: Optional[List[str]] = None
    cancellation_proof: Optional[List[str]] = None
    customer_communication: Optional[List[str]] = None
    proof_of_service: Optional[List[str]] = None
    explanation_letter: Optional[List[str]] = None
    refund_confirmation: Optional[List[str]] = None
    access_activity_log: Optional[List[str]] = None
    refund_cancellation_policy: Optional[List[str]] = None
    term_and_conditions: Optional[List[str]] = None
    others: Optional[List[OtherDisputeEvidence]] = None
    submitted_at: Optional[datetime] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "DisputeEvidence":
        proofs = {name: _document_ids(payload.get(name)) for name in PROOF_FIELDS}
        return cls(
            amount=int(payload["amount"]),
            summary=payload.get("summary"),
            others=optional(
                lambda others: parse_list(OtherDisputeEvidence.from_response, others),
                payload.get("others"),
            ),
            submitted_at=parse_optional_timestamp(payload.get("submitted_at")),
            **proofs,
        )


@dataclass(frozen=True)
class Dispute:
    id: DisputeId
    payment_id: PaymentId
    amount: int
    currency: Currency
    amount_deducted: int
    reason_code: str
    reason_description: str
    respond_by: datetime
    status: DisputeStatus
    phase: DisputePhase
    created_at: datetime
    evidence: Optional[DisputeEvidence] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Dispute":
        expect_entity(payload, "dispute")
        return cls(
            id=DisputeId(payload["id"]),
            payment_id=PaymentId(payload["payment_id"]),
            amount=int(payload["amount"]),
            currency=Currency(payload["currency"]),
            amount_deducted=int(payload.get("amount_deducted") or 0),
            reason_code=payload["reason_code"],
            reason_description=payload.get("reason_description", ""),
            respond_by=parse_timestamp(payload["respond_by"]),
            status=DisputeStatus(payload["status"]),
            phase=DisputePhase(payload["phase"]),
            created_at=parse_timestamp(payload["created_at"]),
            evidence=optional(DisputeEvidence.from_response, payload.get("evidence")),
        )


@dataclass(frozen=True)
class ContestDispute:
    amount: int
    summary: str
    action: ContestDisputeAction = ContestDisputeAction.SUBMIT
    proofs: Mapping[str, Sequence[str]] = field(default_factory=dict)
    others: Optional[Sequence[OtherDisputeEvidence]] = None

    def as_payload(self) -> Dict[str, Any]:
        unknown = set(self.proofs) - set(PROOF_FIELDS)
        if unknown:
            raise ValueError(f"Unknown evidence fields: {sorted(unknown)}")
        payload: Dict[str, Any] = {"amount": self.amount, "summary": self.summary}
        for name in PROOF_FIELDS:
            ids = self.proofs.get(name)
            payload[name] = list(ids) if ids is not None else None
        payload["others"] = list(self.others) if self.others is not None else None
        payload["action"] = self.action
        return compact(payload)


class DisputesAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def list(self) -> Collection[Dispute]:
        return self._api.get(
            RequestDescriptor("/disputes"),
            Collection.decoder(Dispute.from_response),
        )

    def fetch(self, dispute_id: Union[DisputeId, str]) -> Dispute:
        dispute_id = DisputeId.parse(dispute_id)
        return self._api.get(
            RequestDescriptor(f"/disputes/{dispute_id}"),
            Dispute.from_response,
        )

    def accept(self, dispute_id: Union[DisputeId, str]) -> Dispute:
        dispute_id = DisputeId.parse(dispute_id)
        return self._api.post(
            RequestDescriptor(f"/disputes/{dispute_id}/accept"),
            Dispute.from_response,
        )

    def contest(
        self, dispute_id: Union[DisputeId, str], params: ContestDispute
    ) -> Dispute:
        dispute_id = DisputeId.parse(dispute_id)
        return self._api.patch(
            RequestDescriptor(f"/disputes/{dispute_id}/contest", payload=params),
            Dispute.from_response,
        )
