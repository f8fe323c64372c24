"""
Saved cards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import expect_entity
from ..core.ids import CardId

__all__ = [
    "Card",
    "CardNetwork",
    "CardSubType",
    "CardType",
    "CardTypeExtended",
    "CardsAPI",
]


class CardNetwork(str, Enum):
    MASTERCARD = "MasterCard"
    VISA = "Visa"
    RUPAY = "RuPay"
    AMERICAN_EXPRESS = "American Express"
    DINERS_CLUB = "Diners Club"
    BAJAJ_FINSERV = "Bajaj Finserv"
    MAESTRO = "Maestro"
    JCB = "JCB"
    UNION_PAY = "Union Pay"
    UNKNOWN = "unknown"


class CardTypeExtended(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    PREPAID = "prepaid"
    UNKNOWN = "unknown"


class CardType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class CardSubType(str, Enum):
    CUSTOMER = "customer"
    BUSINESS = "business"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Card:
    id: CardId
    name: str
    last4: str
    network: CardNetwork
    type: CardTypeExtended
    issuer: Optional[str]
    emi: bool
    sub_type: CardSubType

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Card":
        expect_entity(payload, "card")
        return cls(
            id=CardId(payload["id"]),
            name=payload.get("name", ""),
            last4=payload["last4"],
            network=CardNetwork(payload["network"]),
            type=CardTypeExtended(payload["type"]),
            issuer=payload.get("issuer"),
            emi=bool(payload.get("emi", False)),
            sub_type=CardSubType(payload.get("sub_type", "unknown")),
        )


class CardsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def fetch(self, card_id: Union[CardId, str]) -> Card:
        card_id = CardId.parse(card_id)
        return self._api.get(
            RequestDescriptor(f"/cards/{card_id}"),
            Card.from_response,
        )
