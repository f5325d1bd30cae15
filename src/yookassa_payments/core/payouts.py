"""
Payout endpoints.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, List, Optional

from .errors import UnsupportedPayoutTypeError
from .models import PAYOUT_TYPE_SBP, Payout, SbpBank, decode_items

if TYPE_CHECKING:
    from .client import YooKassaClient

__all__ = [
    "PAYOUTS_ENDPOINT",
    "PayoutHandler",
    "SBP_BANKS_ENDPOINT",
]

SBP_BANKS_ENDPOINT = "sbp_banks"
PAYOUTS_ENDPOINT = "payouts"

SUPPORTED_PAYOUT_TYPES = frozenset({PAYOUT_TYPE_SBP})


class PayoutHandler:
    def __init__(
        self,
        client: "YooKassaClient",
        *,
        idempotency_key: Optional[str] = None,
    ) -> None:
        self.client = client
        self.idempotency_key = idempotency_key

    def with_idempotency_key(self, idempotency_key: str) -> "PayoutHandler":
        """
        Return a copy of this handler that sends ``idempotency_key``.
        """
        return PayoutHandler(self.client, idempotency_key=idempotency_key)

    def get_sbp_banks(
        self,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> List[SbpBank]:
        """List the banks that accept SBP payouts."""
        payload = self.client.request_json(
            "GET",
            SBP_BANKS_ENDPOINT,
            idempotency_key=self.idempotency_key,
            timeout=timeout,
            cancel=cancel,
        )
        return decode_items(payload, SbpBank.from_dict, "SbpBank")

    def create_payout(
        self,
        payout: Payout,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Payout:
        """
        Create a payout.

        Only SBP destinations are supported; anything else raises
        :class:`UnsupportedPayoutTypeError` without contacting the API.
        """
        destination = payout.payout_destination_data
        payout_type = destination.type if destination is not None else None
        if payout_type not in SUPPORTED_PAYOUT_TYPES:
            raise UnsupportedPayoutTypeError(payout_type)

        payload = self.client.request_json(
            "POST",
            PAYOUTS_ENDPOINT,
            body=payout.to_dict(),
            idempotency_key=self.idempotency_key,
            timeout=timeout,
            cancel=cancel,
        )
        created = Payout.from_dict(payload)
        logging.info("Created payout %s with status %s", created.id, created.status)
        return created

    def get_payout(
        self,
        payout_id: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Payout:
        payload = self.client.request_json(
            "GET",
            f"{PAYOUTS_ENDPOINT}/{payout_id}",
            idempotency_key=self.idempotency_key,
            timeout=timeout,
            cancel=cancel,
        )
        return Payout.from_dict(payload)
