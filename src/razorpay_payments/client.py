"""
The client object integrators hold on to.
"""

from __future__ import annotations

from typing import Optional, Union

import requests

from .core.client import ApiClient
from .core.config import ClientConfig
from .core.errors import ConfigError
from .resources import (
    AccountsAPI,
    AddonsAPI,
    CardsAPI,
    CustomersAPI,
    DisputesAPI,
    DocumentsAPI,
    DowntimesAPI,
    IinsAPI,
    InstantSettlementsAPI,
    InvoicesAPI,
    ItemsAPI,
    OrdersAPI,
    PaymentsAPI,
    PlansAPI,
    RefundsAPI,
    SettlementsAPI,
    SubscriptionsAPI,
    WebhookEvent,
    WebhooksAPI,
    construct_event,
)

__all__ = ["RazorpayClient"]


class RazorpayClient:
    """
    Entry point exposing one attribute per resource, e.g.
    ``client.orders.fetch("order_...")``.

    All resource groups share a single :class:`ApiClient` and therefore a
    single HTTP session. The client is safe to share between threads to the
    extent :class:`requests.Session` is.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.api = ApiClient(config, session=session)

        self.orders = OrdersAPI(self.api)
        self.payments = PaymentsAPI(self.api)
        self.downtimes = DowntimesAPI(self.api)
        self.refunds = RefundsAPI(self.api)
        self.customers = CustomersAPI(self.api)
        self.cards = CardsAPI(self.api)
        self.iins = IinsAPI(self.api)
        self.items = ItemsAPI(self.api)
        self.plans = PlansAPI(self.api)
        self.addons = AddonsAPI(self.api)
        self.subscriptions = SubscriptionsAPI(self.api)
        self.invoices = InvoicesAPI(self.api)
        self.disputes = DisputesAPI(self.api)
        self.documents = DocumentsAPI(self.api)
        self.settlements = SettlementsAPI(self.api)
        self.instant_settlements = InstantSettlementsAPI(self.api)
        self.accounts = AccountsAPI(self.api)
        self.webhooks = WebhooksAPI(self.api)

    def construct_event(
        self,
        body: Union[bytes, str],
        signature: str,
        secret: Optional[str] = None,
    ) -> WebhookEvent:
        """
        Verify and parse a webhook delivery, defaulting to the configured
        ``RAZORPAY_WEBHOOK_SECRET``.
        """
        secret = secret or self.config.webhook_secret
        if not secret:
            raise ConfigError("RAZORPAY_WEBHOOK_SECRET is required to verify webhooks")
        return construct_event(body, signature, secret)

    def close(self) -> None:
        self.api.session.close()

    def __enter__(self) -> "RazorpayClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
