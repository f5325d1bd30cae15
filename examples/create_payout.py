"""
Minimal script that uses the public API to send an SBP payout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation

import requests

from yookassa_payments import (
    Amount,
    ApiError,
    ConfigError,
    Payout,
    PayoutDestination,
    YooKassaError,
    create_client,
)


def _amount(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"Invalid amount '{value}'") from exc


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send an SBP payout using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing YOOKASSA_* settings",
    )
    parser.add_argument("--amount", type=_amount, required=True, help="Payout amount, e.g. 150.00")
    parser.add_argument("--phone", required=True, help="Recipient phone, digits only")
    parser.add_argument("--bank-id", required=True, help="Recipient bank id from `sbp-banks`")
    parser.add_argument("--description", help="Payout description shown to the recipient")
    parser.add_argument(
        "--idempotency-key",
        help="Reuse a key to safely retry the same payout",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        client = create_client(env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    handler = client.payouts()
    if args.idempotency_key:
        handler = handler.with_idempotency_key(args.idempotency_key)

    payout = Payout(
        amount=Amount(args.amount),
        payout_destination_data=PayoutDestination(phone=args.phone, bank_id=args.bank_id),
        description=args.description,
    )
    try:
        created = handler.create_payout(payout)
    except ApiError as exc:
        logging.error("Payout rejected: %s", exc)
        return 1
    except YooKassaError as exc:
        logging.error("Payout failed: %s", exc)
        return 1
    except requests.RequestException as exc:
        logging.error("Payout request failed: %s", exc)
        return 1
    finally:
        client.close()

    logging.info("Payout %s is %s", created.id, created.status)
    return 0


if __name__ == "__main__":
    sys.exit(main())
