"""
Command-line interface for exercising the Razorpay order and webhook APIs.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional, Sequence, Tuple

from .api import create_client
from .client import RazorpayClient
from .core.config import load_client_config
from .core.environment import build_environment
from .core.errors import ConfigError, RazorpayError
from .core.signature import sign
from .resources.common import Currency, Filter
from .resources.orders import CreateOrder, ListOrders
from .resources.webhooks import construct_event


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Expected KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _collect_pairs(pairs: Optional[Iterable[Tuple[str, str]]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs or ():
        collected[key] = value
    return collected


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _emit(result: Any) -> None:
    if dataclasses.is_dataclass(result):
        result = dataclasses.asdict(result)
    print(json.dumps(result, indent=2, default=_json_default))


def _read_body(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as handle:
        return handle.read()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="razorpay-payments",
        description="Call the Razorpay orders API and check webhook signatures",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing RAZORPAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("order-create", help="Create an order")
    create.add_argument("--amount", type=int, required=True, help="Amount in paise")
    create.add_argument(
        "--currency",
        type=Currency,
        default=Currency.INR,
        choices=list(Currency),
    )
    create.add_argument("--receipt")
    create.add_argument(
        "--note", action="append", type=_key_value, metavar="KEY=VALUE"
    )
    create.add_argument("--partial-payment", action="store_true")

    fetch = commands.add_parser("order-fetch", help="Fetch an order by id")
    fetch.add_argument("order_id")

    listing = commands.add_parser("order-list", help="List orders")
    listing.add_argument("--count", type=int)
    listing.add_argument("--skip", type=int)
    listing.add_argument("--receipt")
    listing.add_argument("--authorized", action="store_true", default=None)

    update = commands.add_parser("order-update", help="Replace the notes of an order")
    update.add_argument("order_id")
    update.add_argument(
        "--note", action="append", type=_key_value, metavar="KEY=VALUE", required=True
    )

    sign_cmd = commands.add_parser("webhook-sign", help="Sign a webhook body")
    sign_cmd.add_argument("body", help="Path to the raw body, or - for stdin")
    sign_cmd.add_argument("--secret", help="Defaults to RAZORPAY_WEBHOOK_SECRET")

    verify = commands.add_parser(
        "webhook-verify", help="Verify a webhook signature and print the event"
    )
    verify.add_argument("body", help="Path to the raw body, or - for stdin")
    verify.add_argument("--signature", required=True)
    verify.add_argument("--secret", help="Defaults to RAZORPAY_WEBHOOK_SECRET")
    return parser


def _webhook_secret(args: argparse.Namespace, overrides: dict[str, str]) -> str:
    if args.secret:
        return args.secret
    environment = build_environment(env_file=args.env_file, overrides=overrides)
    secret = environment.get("RAZORPAY_WEBHOOK_SECRET")
    if not secret:
        raise ConfigError("RAZORPAY_WEBHOOK_SECRET is required (or pass --secret)")
    return secret


def _run_order_command(args: argparse.Namespace, overrides: dict[str, str]) -> Any:
    config = load_client_config(env_file=args.env_file, overrides=overrides)
    with create_client(config=config) as client:
        return _dispatch_order_command(client, args)


def _dispatch_order_command(client: RazorpayClient, args: argparse.Namespace) -> Any:
    if args.command == "order-create":
        params = CreateOrder(
            amount=args.amount,
            currency=args.currency,
            receipt=args.receipt,
            notes=_collect_pairs(args.note) or None,
            partial_payment=True if args.partial_payment else None,
        )
        order = client.orders.create(params)
        logging.info("Created order %s", order.id)
        return order
    if args.command == "order-fetch":
        return client.orders.fetch(args.order_id)
    if args.command == "order-list":
        params = ListOrders(
            filter=Filter(count=args.count, skip=args.skip),
            authorized=args.authorized,
            receipt=args.receipt,
        )
        return client.orders.list(params)
    if args.command == "order-update":
        return client.orders.update(args.order_id, _collect_pairs(args.note))
    raise ValueError(f"Unknown command {args.command!r}")


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_pairs(args.set)

    try:
        if args.command == "webhook-sign":
            print(sign(_read_body(args.body), _webhook_secret(args, overrides)))
            return 0
        if args.command == "webhook-verify":
            event = construct_event(
                _read_body(args.body),
                args.signature,
                _webhook_secret(args, overrides),
            )
            logging.info("Verified %s event for %s", event.event.value, event.account_id)
            _emit(event)
            return 0
        _emit(_run_order_command(args, overrides))
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1
    except RazorpayError as exc:
        logging.error("Request failed: %s", exc)
        return 1
    except OSError as exc:
        logging.error("Could not read webhook body: %s", exc)
        return 1
    return 0


def main() -> None:
    sys.exit(run_cli())
