"""
Create an order for INR 1.99 with a receipt and a couple of notes.

Reads RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET from the environment or .env.
"""

from __future__ import annotations

import logging
import sys

from razorpay_payments import RazorpayError, create_client
from razorpay_payments.resources.orders import CreateOrder


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    try:
        client = create_client()
        order = client.orders.create(
            CreateOrder(
                amount=199,
                receipt="receipt#10002",
                notes={"name": "John Doe", "username": "johndoe"},
            )
        )
    except RazorpayError as exc:
        logging.error("Could not create order: %s", exc)
        return 1

    logging.info("Created order %s (%s %s)", order.id, order.amount, order.currency.value)
    print(order)
    return 0


if __name__ == "__main__":
    sys.exit(main())
