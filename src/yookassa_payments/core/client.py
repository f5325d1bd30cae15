"""
HTTP client for the YooKassa API.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Dict, Mapping, Optional

import requests

from .config import ClientConfig
from .errors import DecodeError, RequestCancelledError, decode_error
from .payouts import PayoutHandler
from .refunds import RefundHandler

__all__ = [
    "IDEMPOTENCY_HEADER",
    "YooKassaClient",
]

IDEMPOTENCY_HEADER = "Idempotence-Key"


class YooKassaClient:
    """
    Authenticated session shared by the resource handlers.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def make_request(
        self,
        method: str,
        endpoint: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Mapping[str, str]] = None,
        idempotency_key: Optional[str] = None,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> requests.Response:
        """
        Send one request and return the raw response.

        POST requests without ``idempotency_key`` get a random one. Transport
        errors from :mod:`requests` are not caught here.
        """
        if cancel is not None and cancel.is_set():
            raise RequestCancelledError(f"{method} {endpoint} cancelled before sending")

        method = method.upper()
        headers: Dict[str, str] = {}
        if not idempotency_key and method == "POST":
            idempotency_key = str(uuid.uuid4())
        if idempotency_key:
            headers[IDEMPOTENCY_HEADER] = idempotency_key

        url = self.config.url_for(endpoint)
        logging.info("Requesting %s %s", method, url)
        response = self.session.request(
            method,
            url,
            json=body,
            params=dict(params) if params else None,
            headers=headers,
            auth=self.config.auth,
            timeout=self.config.timeout_seconds if timeout is None else timeout,
        )
        logging.debug("%s %s answered %s", method, url, response.status_code)
        return response

    def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Mapping[str, str]] = None,
        idempotency_key: Optional[str] = None,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """
        Send a request and decode a successful JSON object response.

        Raises :class:`ApiError` for non-200 answers and :class:`DecodeError`
        when the body cannot be understood.
        """
        response = self.make_request(
            method,
            endpoint,
            body=body,
            params=params,
            idempotency_key=idempotency_key,
            timeout=timeout,
            cancel=cancel,
        )
        if response.status_code != 200:
            raise decode_error(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodeError(
                f"Failed to parse JSON from {endpoint}: {response.text}"
            ) from exc
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected a JSON object from {endpoint}: {response.text}")
        return payload

    def payouts(self) -> PayoutHandler:
        return PayoutHandler(self)

    def refunds(self) -> RefundHandler:
        return RefundHandler(self)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "YooKassaClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
