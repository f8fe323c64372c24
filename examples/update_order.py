"""
Mark an order as updated through its notes:
``python update_order.py order_XXXXXXXXXXXXXX``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from razorpay_payments import RazorpayError, create_client


def main() -> int:
    parser = argparse.ArgumentParser(description="Update the notes of a Razorpay order")
    parser.add_argument("order_id")
    parser.add_argument("--env-file", default=".env")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    try:
        client = create_client(env_file=args.env_file)
        order = client.orders.update(args.order_id, {"updated": "true"})
    except RazorpayError as exc:
        logging.error("Could not update order: %s", exc)
        return 1

    logging.info("Order %s updated", order.id)
    print(order)
    return 0


if __name__ == "__main__":
    sys.exit(main())
