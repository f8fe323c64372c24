"""
Fetch one order by id: ``python fetch_order.py order_XXXXXXXXXXXXXX``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from razorpay_payments import RazorpayError, create_client


def main() -> int:
    parser = argparse.ArgumentParser(description="Fetch a Razorpay order")
    parser.add_argument("order_id")
    parser.add_argument("--env-file", default=".env")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    try:
        client = create_client(env_file=args.env_file)
        order = client.orders.fetch(args.order_id)
    except RazorpayError as exc:
        logging.error("Could not fetch order: %s", exc)
        return 1

    print(order)
    return 0


if __name__ == "__main__":
    sys.exit(main())
