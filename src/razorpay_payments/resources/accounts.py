"""
Linked (sub-merchant) accounts. These endpoints live under API ``v2``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import optional, parse_list, parse_notes, parse_optional_timestamp
from ..core.envelope import discard
from ..core.ids import AccountId
from ..core.payloads import compact
from .common import Notes

__all__ = [
    "Account",
    "AccountAddress",
    "AccountAddresses",
    "AccountApp",
    "AccountApps",
    "AccountContactDetails",
    "AccountContactInfo",
    "AccountLegalInfo",
    "AccountProfile",
    "AccountStatus",
    "AccountsAPI",
    "BusinessCategory",
    "BusinessType",
    "CreateAccount",
]

ACCOUNTS_API_VERSION = "v2"


class AccountStatus(str, Enum):
    CREATED = "created"
    ACTIVATED = "activated"
    NEEDS_CLARIFICATION = "needs_clarification"
    UNDER_REVIEW = "under_review"
    SUSPENDED = "suspended"
    REJECTED = "rejected"


class BusinessType(str, Enum):
    PROPRIETORSHIP = "proprietorship"
    PARTNERSHIP = "partnership"
    PRIVATE_LIMITED = "private_limited"
    PUBLIC_LIMITED = "public_limited"
    LLP = "llp"
    NGO = "ngo"
    TRUST = "trust"
    SOCIETY = "society"
    NOT_YET_REGISTERED = "not_yet_registered"
    HUF = "huf"


class BusinessCategory(str, Enum):
    FINANCIAL_SERVICES = "financial_services"
    EDUCATION = "education"
    HEALTHCARE = "healthcare"
    UTILITIES = "utilities"
    GOVERNMENT = "government"
    LOGISTICS = "logistics"
    TOURS_AND_TRAVEL = "tours_and_travel"
    TRANSPORT = "transport"
    ECOMMERCE = "ecommerce"
    FOOD = "food"
    IT_AND_SOFTWARE = "it_and_software"
    GAMING = "gaming"
    MEDIA_AND_ENTERTAINMENT = "media_and_entertainment"
    SERVICES = "services"
    HOUSING = "housing"
    NOT_FOR_PROFIT = "not_for_profit"
    SOCIAL = "social"
    OTHERS = "others"


@dataclass(frozen=True)
class AccountAddress:
    street1: str
    city: str
    state: str
    postal_code: str
    country: str
    street2: str = ""

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "AccountAddress":
        return cls(
            street1=payload["street1"],
            street2=payload.get("street2") or "",
            city=payload["city"],
            state=payload["state"],
            postal_code=str(payload["postal_code"]),
            country=payload["country"],
        )

    def as_payload(self) -> Dict[str, Any]:
        return {
            "street1": self.street1,
            "street2": self.street2,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
        }


@dataclass(frozen=True)
class AccountAddresses:
    registered: AccountAddress
    operation: Optional[AccountAddress] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "AccountAddresses":
        return cls(
            registered=AccountAddress.from_response(payload["registered"]),
            operation=optional(AccountAddress.from_response, payload.get("operation")),
        )

    def as_payload(self) -> Dict[str, Any]:
        return compact({"registered": self.registered, "operation": self.operation})


@dataclass(frozen=True)
class AccountProfile:
    category: BusinessCategory
    # Valid values depend on the category; kept as the service's string.
    subcategory: str
    business_model: str
    addresses: AccountAddresses

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "AccountProfile":
        return cls(
            category=BusinessCategory(payload["category"]),
            subcategory=payload["subcategory"],
            business_model=payload.get("business_model") or payload.get("description", ""),
            addresses=AccountAddresses.from_response(payload["addresses"]),
        )

    def as_payload(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "subcategory": self.subcategory,
            "business_model": self.business_model,
            "addresses": self.addresses,
        }


@dataclass(frozen=True)
class AccountLegalInfo:
    pan: Optional[str] = None
    gst: Optional[str] = None
    cin: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "AccountLegalInfo":
        return cls(pan=payload.get("pan"), gst=payload.get("gst"), cin=payload.get("cin"))

    def as_payload(self) -> Dict[str, Any]:
        return compact({"pan": self.pan, "gst": self.gst, "cin": self.cin})


@dataclass(frozen=True)
class AccountContactDetails:
    email: str
    phone: str
    policy_url: str

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "AccountContactDetails":
        return cls(
            email=payload["email"],
            phone=str(payload["phone"]),
            policy_url=payload["policy_url"],
        )

    def as_payload(self) -> Dict[str, Any]:
        return {"email": self.email, "phone": self.phone, "policy_url": self.policy_url}


@dataclass(frozen=True)
class AccountContactInfo:
    chargeback: AccountContactDetails
    refund: AccountContactDetails
    support: AccountContactDetails

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "AccountContactInfo":
        return cls(
            chargeback=AccountContactDetails.from_response(payload["chargeback"]),
            refund=AccountContactDetails.from_response(payload["refund"]),
            support=AccountContactDetails.from_response(payload["support"]),
        )

    def as_payload(self) -> Dict[str, Any]:
        return {
            "chargeback": self.chargeback,
            "refund": self.refund,
            "support": self.support,
        }


@dataclass(frozen=True)
class AccountApp:
    name: str
    url: str

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "AccountApp":
        return cls(name=payload["name"], url=payload["url"])

    def as_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class AccountApps:
    websites: Sequence[str] = ()
    android: Sequence[AccountApp] = ()
    ios: Sequence[AccountApp] = ()

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "AccountApps":
        return cls(
            websites=parse_list(str, payload.get("websites")),
            android=parse_list(AccountApp.from_response, payload.get("android")),
            ios=parse_list(AccountApp.from_response, payload.get("ios")),
        )

    def as_payload(self) -> Dict[str, Any]:
        return {
            "websites": list(self.websites),
            "android": list(self.android),
            "ios": list(self.ios),
        }


@dataclass(frozen=True)
class Account:
    id: AccountId
    status: AccountStatus
    email: str
    phone: str
    legal_business_name: str
    business_type: BusinessType
    contact_name: str
    type: str = "standard"
    customer_facing_business_name: Optional[str] = None
    reference_id: Optional[str] = None
    profile: Optional[AccountProfile] = None
    legal_info: Optional[AccountLegalInfo] = None
    brand_color: Optional[str] = None
    notes: Notes = field(default_factory=dict)
    contact_info: Optional[AccountContactInfo] = None
    apps: Optional[AccountApps] = None
    activated_at: Optional[datetime] = None
    live: bool = False
    hold_funds: bool = False

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Account":
        brand = payload.get("brand") or {}
        return cls(
            id=AccountId(payload["id"]),
            status=AccountStatus(payload["status"]),
            email=payload["email"],
            phone=str(payload["phone"]),
            legal_business_name=payload["legal_business_name"],
            business_type=BusinessType(payload["business_type"]),
            contact_name=payload["contact_name"],
            type=payload.get("type", "standard"),
            customer_facing_business_name=payload.get("customer_facing_business_name"),
            reference_id=payload.get("reference_id"),
            profile=optional(AccountProfile.from_response, payload.get("profile")),
            legal_info=optional(AccountLegalInfo.from_response, payload.get("legal_info")),
            brand_color=brand.get("color"),
            notes=parse_notes(payload.get("notes")),
            contact_info=optional(
                AccountContactInfo.from_response, payload.get("contact_info")
            ),
            apps=optional(AccountApps.from_response, payload.get("apps")),
            activated_at=parse_optional_timestamp(payload.get("activated_at")),
            live=bool(payload.get("live", False)),
            hold_funds=bool(payload.get("hold_funds", False)),
        )


@dataclass(frozen=True)
class CreateAccount:
    email: str
    phone: str
    legal_business_name: str
    contact_name: str
    business_type: BusinessType = BusinessType.PROPRIETORSHIP
    customer_facing_business_name: Optional[str] = None
    reference_id: Optional[str] = None
    profile: Optional[AccountProfile] = None
    legal_info: Optional[AccountLegalInfo] = None
    brand_color: Optional[str] = None
    notes: Optional[Notes] = None
    contact_info: Optional[AccountContactInfo] = None
    apps: Optional[AccountApps] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "email": self.email,
                "phone": self.phone,
                "legal_business_name": self.legal_business_name,
                "customer_facing_business_name": self.customer_facing_business_name,
                "business_type": self.business_type,
                "reference_id": self.reference_id,
                "profile": self.profile,
                "legal_info": self.legal_info,
                "brand": {"color": self.brand_color} if self.brand_color else None,
                "notes": self.notes,
                "contact_name": self.contact_name,
                "contact_info": self.contact_info,
                "apps": self.apps,
            }
        )


class AccountsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, params: CreateAccount) -> Account:
        return self._api.post(
            RequestDescriptor("/accounts", ACCOUNTS_API_VERSION, params),
            Account.from_response,
        )

    def fetch(self, account_id: Union[AccountId, str]) -> Account:
        account_id = AccountId.parse(account_id)
        return self._api.get(
            RequestDescriptor(f"/accounts/{account_id}", ACCOUNTS_API_VERSION),
            Account.from_response,
        )

    def delete(self, account_id: Union[AccountId, str]) -> None:
        account_id = AccountId.parse(account_id)
        self._api.delete(
            RequestDescriptor(f"/accounts/{account_id}", ACCOUNTS_API_VERSION),
            discard,
        )
