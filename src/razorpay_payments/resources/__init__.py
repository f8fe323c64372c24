"""
Resource method groups and their request/response models.
"""

from .accounts import AccountsAPI
from .addons import AddonsAPI
from .cards import CardsAPI
from .common import Collection, Currency, Filter
from .customers import CustomersAPI
from .disputes import DisputesAPI
from .documents import DocumentsAPI
from .iins import IinsAPI
from .invoices import InvoicesAPI
from .items import ItemsAPI
from .orders import OrdersAPI
from .payments import DowntimesAPI, PaymentsAPI
from .plans import PlansAPI
from .refunds import RefundsAPI
from .settlements import InstantSettlementsAPI, SettlementsAPI
from .subscriptions import SubscriptionsAPI
from .webhooks import WebhookEvent, WebhooksAPI, construct_event

__all__ = [
    "AccountsAPI",
    "AddonsAPI",
    "CardsAPI",
    "Collection",
    "Currency",
    "CustomersAPI",
    "DisputesAPI",
    "DocumentsAPI",
    "DowntimesAPI",
    "Filter",
    "IinsAPI",
    "InstantSettlementsAPI",
    "InvoicesAPI",
    "ItemsAPI",
    "OrdersAPI",
    "PaymentsAPI",
    "PlansAPI",
    "RefundsAPI",
    "SettlementsAPI",
    "SubscriptionsAPI",
    "WebhookEvent",
    "WebhooksAPI",
    "construct_event",
]
