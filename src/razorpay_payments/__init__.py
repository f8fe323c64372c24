"""
Typed client for the Razorpay payments API.

The most useful pieces are re-exported here so integrators can
``from razorpay_payments import ...`` without navigating the package.
"""

from .api import construct_webhook_event, create_client
from .client import RazorpayClient
from .core import (
    ApiError,
    ClientConfig,
    ClientParameters,
    ConfigError,
    Credentials,
    InvalidIdError,
    RazorpayError,
    SerializationError,
    TransportError,
    WebhookError,
    WebhookParseError,
    WebhookSignatureError,
    build_environment,
    load_client_config,
    load_env_file,
    sign,
    verify_signature,
)
from .core.ids import (
    AccountId,
    AddonId,
    CardId,
    CustomerId,
    DisputeId,
    DocumentId,
    InvoiceId,
    ItemId,
    OrderId,
    PaymentId,
    PlanId,
    RefundId,
    SettlementId,
    SubscriptionId,
)
from .resources import Collection, Currency, Filter, WebhookEvent, construct_event

__all__ = (
    "AccountId",
    "AddonId",
    "ApiError",
    "CardId",
    "ClientConfig",
    "ClientParameters",
    "Collection",
    "ConfigError",
    "Credentials",
    "Currency",
    "CustomerId",
    "DisputeId",
    "DocumentId",
    "Filter",
    "InvalidIdError",
    "InvoiceId",
    "ItemId",
    "OrderId",
    "PaymentId",
    "PlanId",
    "RazorpayClient",
    "RazorpayError",
    "RefundId",
    "SerializationError",
    "SettlementId",
    "SubscriptionId",
    "TransportError",
    "WebhookError",
    "WebhookEvent",
    "WebhookParseError",
    "WebhookSignatureError",
    "build_environment",
    "construct_event",
    "construct_webhook_event",
    "create_client",
    "load_client_config",
    "load_env_file",
    "sign",
    "verify_signature",
)
