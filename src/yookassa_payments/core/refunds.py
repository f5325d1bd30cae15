"""
Refund endpoints.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Optional

from .models import Refund, RefundList, RefundListFilter

if TYPE_CHECKING:
    from .client import YooKassaClient

__all__ = [
    "REFUNDS_ENDPOINT",
    "RefundHandler",
]

REFUNDS_ENDPOINT = "refunds"


class RefundHandler:
    def __init__(
        self,
        client: "YooKassaClient",
        *,
        idempotency_key: Optional[str] = None,
    ) -> None:
        self.client = client
        self.idempotency_key = idempotency_key

    def with_idempotency_key(self, idempotency_key: str) -> "RefundHandler":
        return RefundHandler(self.client, idempotency_key=idempotency_key)

    def create_refund(
        self,
        refund: Refund,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Refund:
        """Create a refund for ``refund.payment_id``."""
        payload = self.client.request_json(
            "POST",
            REFUNDS_ENDPOINT,
            body=refund.to_dict(),
            idempotency_key=self.idempotency_key,
            timeout=timeout,
            cancel=cancel,
        )
        created = Refund.from_dict(payload)
        logging.info(
            "Created refund %s for payment %s with status %s",
            created.id,
            created.payment_id,
            created.status,
        )
        return created

    def find_refund(
        self,
        refund_id: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Refund:
        payload = self.client.request_json(
            "GET",
            f"{REFUNDS_ENDPOINT}/{refund_id}",
            idempotency_key=self.idempotency_key,
            timeout=timeout,
            cancel=cancel,
        )
        return Refund.from_dict(payload)

    def find_refunds(
        self,
        refund_filter: Optional[RefundListFilter] = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> RefundList:
        """
        List refunds matching ``refund_filter``.

        Pass ``next_cursor`` from the previous page as ``cursor`` to fetch the
        next one.
        """
        params = (refund_filter or RefundListFilter()).to_params()
        payload = self.client.request_json(
            "GET",
            REFUNDS_ENDPOINT,
            params=params,
            idempotency_key=self.idempotency_key,
            timeout=timeout,
            cancel=cancel,
        )
        return RefundList.from_dict(payload)
