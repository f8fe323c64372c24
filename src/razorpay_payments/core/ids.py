"""
Identifier types for Razorpay entities.

Every id is a ``str`` carrying a fixed prefix (``order_``, ``pay_``, ...).
Constructing one validates the prefix, so a malformed id is rejected before
a request is ever sent.
"""

from __future__ import annotations

from typing import ClassVar, Type, TypeVar, Union

from .errors import InvalidIdError

__all__ = [
    "AccountId",
    "AddonId",
    "AddressId",
    "AdjustmentId",
    "BatchId",
    "CardId",
    "CustomerId",
    "DisputeId",
    "DocumentId",
    "DowntimeId",
    "EntityId",
    "InstantSettlementId",
    "InstantSettlementPayoutId",
    "InvoiceId",
    "ItemId",
    "LineItemId",
    "OfferId",
    "OrderId",
    "PaymentId",
    "PlanId",
    "RefundId",
    "SettlementId",
    "SubscriptionId",
    "TransferId",
]

I = TypeVar("I", bound="EntityId")


class EntityId(str):
    prefix: ClassVar[str] = ""

    def __new__(cls: Type[I], value: str) -> I:
        if not isinstance(value, str) or not value.startswith(cls.prefix):
            raise InvalidIdError(cls.__name__, cls.prefix, value)
        return super().__new__(cls, value)

    @classmethod
    def parse(cls: Type[I], value: Union[str, "EntityId"]) -> I:
        if type(value) is cls:
            return value
        return cls(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"


class CardId(EntityId):
    prefix = "card_"


class ItemId(EntityId):
    prefix = "item_"


class PlanId(EntityId):
    prefix = "plan_"


class AddonId(EntityId):
    prefix = "ao_"


class OrderId(EntityId):
    prefix = "order_"


class OfferId(EntityId):
    prefix = "offer_"


class BatchId(EntityId):
    prefix = "batch_"


class RefundId(EntityId):
    prefix = "rfnd_"


class AccountId(EntityId):
    prefix = "acc_"


class AddressId(EntityId):
    prefix = "addr_"


class DisputeId(EntityId):
    prefix = "disp_"


class InvoiceId(EntityId):
    prefix = "inv_"


class PaymentId(EntityId):
    prefix = "pay_"


class CustomerId(EntityId):
    prefix = "cust_"


class DowntimeId(EntityId):
    prefix = "down_"


class DocumentId(EntityId):
    prefix = "doc_"


class TransferId(EntityId):
    prefix = "trf_"


class LineItemId(EntityId):
    prefix = "li_"


class AdjustmentId(EntityId):
    prefix = "adj_"


class SettlementId(EntityId):
    prefix = "setl_"


class SubscriptionId(EntityId):
    prefix = "sub_"


class InstantSettlementId(EntityId):
    prefix = "setlod_"


class InstantSettlementPayoutId(EntityId):
    prefix = "setlodp_"
