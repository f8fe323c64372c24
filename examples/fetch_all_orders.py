"""
List orders, first with defaults and then the ten latest authorized ones
with their payments and cards expanded.
"""

from __future__ import annotations

import logging
import sys

from razorpay_payments import Filter, RazorpayError, create_client
from razorpay_payments.resources.orders import ListOrders, OrderExpand


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    try:
        client = create_client()
        orders = client.orders.list()
        logging.info("%s orders found", orders.count)
        for order in orders:
            print(order)

        orders = client.orders.list(
            ListOrders(
                expand=[OrderExpand.PAYMENTS, OrderExpand.PAYMENTS_CARD],
                filter=Filter(count=10),
                authorized=True,
            )
        )
    except RazorpayError as exc:
        logging.error("Could not list orders: %s", exc)
        return 1

    logging.info("%s authorized orders found", orders.count)
    for order in orders:
        print(order)
    return 0


if __name__ == "__main__":
    sys.exit(main())
