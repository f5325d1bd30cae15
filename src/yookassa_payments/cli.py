"""
Command-line interface for the YooKassa payouts, refunds and webhook helpers.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from typing import Any, Callable, Sequence, Tuple

import requests

from .api import create_client
from .core.client import YooKassaClient
from .core.config import ConfigError
from .core.errors import YooKassaError
from .core.models import RefundListFilter
from .core.webhook import get_trusted_ip_ranges, is_notification_ip_trusted


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yookassa-payments",
        description="Work with YooKassa payouts, refunds and webhook sources",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing YOOKASSA_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
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

    check_ip = commands.add_parser(
        "check-ip", help="Check whether addresses belong to YooKassa notification networks"
    )
    check_ip.add_argument("ips", nargs="+", metavar="IP")

    commands.add_parser("trusted-ranges", help="Print the trusted notification networks")
    commands.add_parser("sbp-banks", help="List banks available for SBP payouts")

    get_payout = commands.add_parser("get-payout", help="Fetch a payout by id")
    get_payout.add_argument("payout_id")

    get_refund = commands.add_parser("get-refund", help="Fetch a refund by id")
    get_refund.add_argument("refund_id")

    list_refunds = commands.add_parser("list-refunds", help="List refunds")
    list_refunds.add_argument("--payment-id")
    list_refunds.add_argument("--status", choices=("pending", "succeeded", "canceled"))
    list_refunds.add_argument("--limit", type=int)
    list_refunds.add_argument("--cursor")
    return parser


def _check_ip(args: argparse.Namespace) -> int:
    all_trusted = True
    for ip in args.ips:
        trusted = is_notification_ip_trusted(ip)
        all_trusted = all_trusted and trusted
        print(f"{ip} {'trusted' if trusted else 'untrusted'}")
    return 0 if all_trusted else 1


def _trusted_ranges(args: argparse.Namespace) -> int:
    for cidr in get_trusted_ip_ranges():
        print(cidr)
    return 0


def _sbp_banks(client: YooKassaClient, args: argparse.Namespace) -> Any:
    return [dataclasses.asdict(bank) for bank in client.payouts().get_sbp_banks()]


def _get_payout(client: YooKassaClient, args: argparse.Namespace) -> Any:
    return client.payouts().get_payout(args.payout_id).raw


def _get_refund(client: YooKassaClient, args: argparse.Namespace) -> Any:
    return client.refunds().find_refund(args.refund_id).raw


def _list_refunds(client: YooKassaClient, args: argparse.Namespace) -> Any:
    refund_filter = RefundListFilter(
        payment_id=args.payment_id,
        status=args.status,
        limit=args.limit,
        cursor=args.cursor,
    )
    refunds = client.refunds().find_refunds(refund_filter)
    return {
        "type": refunds.type,
        "items": [refund.raw for refund in refunds.items],
        "next_cursor": refunds.next_cursor,
    }


_OFFLINE_COMMANDS: dict[str, Callable[[argparse.Namespace], int]] = {
    "check-ip": _check_ip,
    "trusted-ranges": _trusted_ranges,
}

_API_COMMANDS: dict[str, Callable[[YooKassaClient, argparse.Namespace], Any]] = {
    "sbp-banks": _sbp_banks,
    "get-payout": _get_payout,
    "get-refund": _get_refund,
    "list-refunds": _list_refunds,
}


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.command in _OFFLINE_COMMANDS:
        return _OFFLINE_COMMANDS[args.command](args)

    overrides = dict(args.set or ())
    try:
        client = create_client(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with client:
        try:
            result = _API_COMMANDS[args.command](client, args)
        except YooKassaError as exc:
            logging.error("%s failed: %s", args.command, exc)
            return 1
        except requests.RequestException as exc:
            logging.error("%s request failed: %s", args.command, exc)
            return 1

    _print_json(result)
    return 0


def main() -> None:
    raise SystemExit(run_cli())
