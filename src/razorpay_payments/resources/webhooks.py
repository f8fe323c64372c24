"""
Webhook subscriptions and inbound webhook events.

Inbound deliveries are authenticated with :func:`construct_event`, which
checks the HMAC signature before the body is parsed at all.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import (
    expect_entity,
    parse_list,
    parse_optional_timestamp,
    parse_timestamp,
)
from ..core.envelope import discard
from ..core.errors import WebhookParseError, WebhookSignatureError
from ..core.ids import AccountId
from ..core.payloads import compact
from ..core.signature import verify_signature
from .accounts import Account
from .common import Collection, Filter
from .disputes import Dispute
from .invoices import Invoice
from .orders import Order
from .payments import Payment
from .refunds import Refund
from .subscriptions import Subscription

__all__ = [
    "CreateWebhook",
    "EventType",
    "UpdateWebhook",
    "Webhook",
    "WebhookEvent",
    "WebhookPayload",
    "WebhookPayloadItemName",
    "WebhooksAPI",
    "construct_event",
]

WEBHOOKS_API_VERSION = "v2"


class EventType(str, Enum):
    PAYMENT_AUTHORIZED = "payment.authorized"
    PAYMENT_FAILED = "payment.failed"
    PAYMENT_CAPTURED = "payment.captured"
    PAYMENT_DISPUTE_CREATED = "payment.dispute.created"
    PAYMENT_DISPUTE_WON = "payment.dispute.won"
    PAYMENT_DISPUTE_LOST = "payment.dispute.lost"
    PAYMENT_DISPUTE_CLOSED = "payment.dispute.closed"
    PAYMENT_DISPUTE_UNDER_REVIEW = "payment.dispute.under_review"
    PAYMENT_DISPUTE_ACTION_REQUIRED = "payment.dispute.action_required"
    PAYMENT_DOWNTIME_STARTED = "payment.downtime.started"
    PAYMENT_DOWNTIME_UPDATED = "payment.downtime.updated"
    PAYMENT_DOWNTIME_RESOLVED = "payment.downtime.resolved"
    ORDER_PAID = "order.paid"
    INVOICE_PAID = "invoice.paid"
    INVOICE_PARTIALLY_PAID = "invoice.partially_paid"
    INVOICE_EXPIRED = "invoice.expired"
    SUBSCRIPTION_AUTHENTICATED = "subscription.authenticated"
    SUBSCRIPTION_PAUSED = "subscription.paused"
    SUBSCRIPTION_RESUMED = "subscription.resumed"
    SUBSCRIPTION_ACTIVATED = "subscription.activated"
    SUBSCRIPTION_PENDING = "subscription.pending"
    SUBSCRIPTION_HALTED = "subscription.halted"
    SUBSCRIPTION_CHARGED = "subscription.charged"
    SUBSCRIPTION_CANCELLED = "subscription.cancelled"
    SUBSCRIPTION_COMPLETED = "subscription.completed"
    SUBSCRIPTION_UPDATED = "subscription.updated"
    SETTLEMENT_PROCESSED = "settlement.processed"
    VIRTUAL_ACCOUNT_CREDITED = "virtual_account.credited"
    VIRTUAL_ACCOUNT_CREATED = "virtual_account.created"
    VIRTUAL_ACCOUNT_CLOSED = "virtual_account.closed"
    FUND_ACCOUNT_VALIDATION_COMPLETED = "fund_account.validation.completed"
    FUND_ACCOUNT_VALIDATION_FAILED = "fund_account.validation.failed"
    PAYOUT_PROCESSED = "payout.processed"
    PAYOUT_REVERSED = "payout.reversed"
    PAYOUT_INITIATED = "payout.initiated"
    PAYOUT_UPDATED = "payout.updated"
    PAYOUT_REJECTED = "payout.rejected"
    PAYOUT_PENDING = "payout.pending"
    PAYOUT_QUEUED = "payout.queued"
    PAYOUT_FAILED = "payout.failed"
    PAYOUT_DOWNTIME_STARTED = "payout.downtime.started"
    PAYOUT_DOWNTIME_RESOLVED = "payout.downtime.resolved"
    REFUND_SPEED_CHANGED = "refund.speed_changed"
    REFUND_PROCESSED = "refund.processed"
    REFUND_FAILED = "refund.failed"
    REFUND_CREATED = "refund.created"
    TRANSFER_PROCESSED = "transfer.processed"
    TRANSFER_FAILED = "transfer.failed"
    ACCOUNT_UNDER_REVIEW = "account.under_review"
    ACCOUNT_NEEDS_CLARIFICATION = "account.needs_clarification"
    ACCOUNT_ACTIVATED = "account.activated"
    ACCOUNT_REJECTED = "account.rejected"
    ACCOUNT_UPDATED = "account.updated"
    ACCOUNT_SUSPENDED = "account.suspended"
    ACCOUNT_FUNDS_HOLD = "account.funds_hold"
    ACCOUNT_FUNDS_UNHOLD = "account.funds_unhold"
    ACCOUNT_INSTANTLY_ACTIVATED = "account.instantly_activated"
    ACCOUNT_PAYMENTS_ENABLED = "account.payments_enabled"
    ACCOUNT_APP_AUTHORIZATION_REVOKED = "account.app.authorization_revoked"
    PAYMENT_LINK_PENDING = "payment_link.pending"
    PAYMENT_LINK_PAID = "payment_link.paid"
    PAYMENT_LINK_PARTIALLY_PAID = "payment_link.partially_paid"
    PAYMENT_LINK_EXPIRED = "payment_link.expired"
    PAYMENT_LINK_CANCELLED = "payment_link.cancelled"
    PRODUCT_ROUTE_ACTIVATED = "product.route.activated"
    PRODUCT_ROUTE_UNDER_REVIEW = "product.route.under_review"
    PRODUCT_ROUTE_NEEDS_CLARIFICATION = "product.route.needs_clarification"
    PRODUCT_ROUTE_REJECTED = "product.route.rejected"
    PRODUCT_PAYMENT_GATEWAY_ACTIVATED = "product.payment_gateway.activated"
    PRODUCT_PAYMENT_GATEWAY_UNDER_REVIEW = "product.payment_gateway.under_review"
    PRODUCT_PAYMENT_GATEWAY_NEEDS_CLARIFICATION = (
        "product.payment_gateway.needs_clarification"
    )
    PRODUCT_PAYMENT_GATEWAY_REJECTED = "product.payment_gateway.rejected"
    PRODUCT_PAYMENT_GATEWAY_ACTIVATED_KYC_PENDING = (
        "product.payment_gateway.activated_kyc_pending"
    )
    PAYOUT_LINK_PENDING = "payout_link.pending"
    PAYOUT_LINK_ISSUED = "payout_link.issued"
    PAYOUT_LINK_PROCESSING = "payout_link.processing"
    PAYOUT_LINK_PROCESSED = "payout_link.processed"
    PAYOUT_LINK_ATTEMPTED = "payout_link.attempted"
    PAYOUT_LINK_CANCELLED = "payout_link.cancelled"
    PAYOUT_LINK_REJECTED = "payout_link.rejected"
    PAYOUT_LINK_EXPIRED = "payout_link.expired"
    TRANSACTION_CREATED = "transaction.created"


class WebhookPayloadItemName(str, Enum):
    ORDER = "order"
    PAYMENT = "payment"
    REFUND = "refund"
    DISPUTE = "dispute"
    INVOICE = "invoice"
    SUBSCRIPTION = "subscription"
    TRANSFER = "transfer"
    VIRTUAL_ACCOUNT = "virtual_account"
    PAYMENT_LINK = "payment_link"
    FUND_ACCOUNT_VALIDATION = "fund_account.validation"
    PAYOUT = "payout"
    PAYOUT_LINK = "payout_link"
    MERCHANT_PRODUCT = "merchant_product"
    ACCOUNT = "account"
    PAYOUT_DOWNTIME = "payout.downtime"
    TRANSACTION = "transaction"


_ENTITY_DECODERS: Dict[WebhookPayloadItemName, Callable[[Any], Any]] = {
    WebhookPayloadItemName.ORDER: Order.from_response,
    WebhookPayloadItemName.PAYMENT: Payment.from_response,
    WebhookPayloadItemName.REFUND: Refund.from_response,
    WebhookPayloadItemName.DISPUTE: Dispute.from_response,
    WebhookPayloadItemName.INVOICE: Invoice.from_response,
    WebhookPayloadItemName.SUBSCRIPTION: Subscription.from_response,
    WebhookPayloadItemName.ACCOUNT: Account.from_response,
}


@dataclass(frozen=True)
class WebhookPayload:
    """
    One entry of an event's ``payload``.

    ``entity`` is the typed model for kinds this library models and the raw
    JSON object otherwise, or when the object does not match the model.
    ``data`` is passed through untouched.
    """

    entity: Any
    data: Any = None

    @classmethod
    def from_response(
        cls, name: WebhookPayloadItemName, payload: Mapping[str, Any]
    ) -> "WebhookPayload":
        raw = payload["entity"]
        decoder = _ENTITY_DECODERS.get(name)
        entity = raw
        if decoder is not None:
            try:
                entity = decoder(raw)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logging.debug("Keeping raw %s webhook entity: %s", name.value, exc)
        return cls(entity=entity, data=payload.get("data"))


@dataclass(frozen=True)
class WebhookEvent:
    account_id: str
    event: EventType
    contains: List[WebhookPayloadItemName]
    created_at: datetime
    payload: Dict[WebhookPayloadItemName, WebhookPayload] = field(default_factory=dict)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "WebhookEvent":
        if payload.get("entity") != "event":
            raise ValueError(f"expected entity to be 'event', got {payload.get('entity')!r}")
        items = {}
        for key, value in (payload.get("payload") or {}).items():
            name = WebhookPayloadItemName(key)
            items[name] = WebhookPayload.from_response(name, value)
        return cls(
            account_id=payload["account_id"],
            event=EventType(payload["event"]),
            contains=parse_list(WebhookPayloadItemName, payload["contains"]),
            created_at=parse_timestamp(payload["created_at"]),
            payload=items,
        )

    def entity(self, name: Union[WebhookPayloadItemName, str]) -> Any:
        """Return the entity delivered under ``name``, or ``None``."""
        item = self.payload.get(WebhookPayloadItemName(name))
        return item.entity if item is not None else None


def construct_event(
    body: Union[bytes, str], signature: str, secret: str
) -> WebhookEvent:
    """
    Authenticate a webhook delivery and parse it.

    ``body`` must be the raw request body exactly as received. Raises
    :class:`WebhookSignatureError` when ``signature`` does not match, without
    looking at the body, and :class:`WebhookParseError` when the body is not
    a webhook event.
    """
    if not verify_signature(body, signature, secret):
        raise WebhookSignatureError()
    try:
        return WebhookEvent.from_response(json.loads(body))
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise WebhookParseError(exc) from exc


class WebhookOwnerType(str, Enum):
    MERCHANT = "merchant"


@dataclass(frozen=True)
class Webhook:
    id: str
    owner_id: AccountId
    url: str
    active: bool
    events: List[EventType]
    created_at: datetime
    updated_at: Optional[datetime] = None
    owner_type: WebhookOwnerType = WebhookOwnerType.MERCHANT
    secret: Optional[str] = field(default=None, repr=False)
    alert_email: Optional[str] = None
    secret_exists: bool = False

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Webhook":
        expect_entity(payload, "webhook")
        return cls(
            id=payload["id"],
            owner_id=AccountId(payload["owner_id"]),
            url=payload["url"],
            active=bool(payload["active"]),
            events=parse_list(EventType, payload.get("events")),
            created_at=parse_timestamp(payload["created_at"]),
            updated_at=parse_optional_timestamp(payload.get("updated_at")),
            owner_type=WebhookOwnerType(payload.get("owner_type", "merchant")),
            secret=payload.get("secret"),
            alert_email=payload.get("alert_email"),
            secret_exists=bool(payload.get("secret_exists", False)),
        )


@dataclass(frozen=True)
class CreateWebhook:
    url: str
    events: Sequence[EventType]
    alert_email: Optional[str] = None
    secret: Optional[str] = field(default=None, repr=False)

    def as_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "url": self.url,
                "alert_email": self.alert_email,
                "secret": self.secret,
                "events": list(self.events),
            }
        )


@dataclass(frozen=True)
class UpdateWebhook:
    events: Sequence[EventType]
    url: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        return compact({"url": self.url, "events": list(self.events)})


class WebhooksAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, account_id: Union[AccountId, str], params: CreateWebhook) -> Webhook:
        account_id = AccountId.parse(account_id)
        return self._api.post(
            RequestDescriptor(
                f"/accounts/{account_id}/webhooks", WEBHOOKS_API_VERSION, params
            ),
            Webhook.from_response,
        )

    def fetch(self, account_id: Union[AccountId, str], webhook_id: str) -> Webhook:
        account_id = AccountId.parse(account_id)
        return self._api.get(
            RequestDescriptor(f"/accounts/{account_id}/webhooks/{webhook_id}"),
            Webhook.from_response,
        )

    def list(
        self,
        account_id: Union[AccountId, str],
        params: Optional[Filter] = None,
    ) -> Collection[Webhook]:
        account_id = AccountId.parse(account_id)
        return self._api.get(
            RequestDescriptor(
                f"/accounts/{account_id}/webhooks", WEBHOOKS_API_VERSION, params
            ),
            Collection.decoder(Webhook.from_response),
        )

    def update(
        self,
        account_id: Union[AccountId, str],
        webhook_id: str,
        params: UpdateWebhook,
    ) -> Webhook:
        account_id = AccountId.parse(account_id)
        return self._api.patch(
            RequestDescriptor(
                f"/accounts/{account_id}/webhooks/{webhook_id}",
                WEBHOOKS_API_VERSION,
                params,
            ),
            Webhook.from_response,
        )

    def delete(self, account_id: Union[AccountId, str], webhook_id: str) -> None:
        account_id = AccountId.parse(account_id)
        self._api.delete(
            RequestDescriptor(
                f"/accounts/{account_id}/webhooks/{webhook_id}", WEBHOOKS_API_VERSION
            ),
            discard,
        )
