"""
Card issuer identification numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import expect_entity, parse_list
from .cards import CardNetwork, CardSubType, CardTypeExtended

__all__ = ["Iin", "IinAuthenticationType", "IinsAPI"]


class IinAuthenticationType(str, Enum):
    THREE_DOMAIN_SECURE = "3ds"
    ONE_TIME_PASSWORD = "otp"


@dataclass(frozen=True)
class Iin:
    iin: str
    network: CardNetwork
    type: CardTypeExtended
    sub_type: CardSubType
    international: bool
    issuer_code: str
    issuer_name: str
    emi_available: bool
    recurring_available: bool
    authentication_types: List[IinAuthenticationType]

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Iin":
        expect_entity(payload, "iin")
        return cls(
            iin=payload["iin"],
            network=CardNetwork(payload["network"]),
            type=CardTypeExtended(payload["type"]),
            sub_type=CardSubType(payload["sub_type"]),
            international=bool(payload["international"]),
            issuer_code=payload["issuer_code"],
            issuer_name=payload["issuer_name"],
            emi_available=bool(payload["emi"]["available"]),
            recurring_available=bool(payload["recurring"]["available"]),
            authentication_types=parse_list(
                lambda option: IinAuthenticationType(option["type"]),
                payload.get("authentication_types"),
            ),
        )


class IinsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def fetch(self, iin: str) -> Iin:
        return self._api.get(RequestDescriptor(f"/iins/{iin}"), Iin.from_response)
