"""
Exception types raised by the YooKassa client.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

__all__ = [
    "ApiError",
    "DecodeError",
    "RegistryIntegrityError",
    "RequestCancelledError",
    "UnsupportedPayoutTypeError",
    "ValidationError",
    "YooKassaError",
    "decode_error",
]


class YooKassaError(Exception):
    """Base class for errors raised by the client."""


class ValidationError(YooKassaError):
    """Raised before any request is sent when the input cannot be submitted."""


class UnsupportedPayoutTypeError(ValidationError):
    def __init__(self, payout_type: Optional[str]) -> None:
        super().__init__(f"Unsupported payout type: {payout_type!r}")
        self.payout_type = payout_type


class RequestCancelledError(YooKassaError):
    """Raised when a request is cancelled before it reaches the API."""


class DecodeError(YooKassaError):
    """Raised when a response body cannot be decoded."""


class ApiError(YooKassaError):
    """
    Error envelope returned by the API for a non-success status code.
    """

    def __init__(
        self,
        status_code: int,
        *,
        code: Optional[str] = None,
        description: Optional[str] = None,
        error_id: Optional[str] = None,
        parameter: Optional[str] = None,
        error_type: Optional[str] = None,
    ) -> None:
        super().__init__(f"{code}: {description}")
        self.status_code = status_code
        self.code = code
        self.description = description
        self.id = error_id
        self.parameter = parameter
        self.type = error_type

    @classmethod
    def from_payload(cls, status_code: int, payload: Dict[str, Any]) -> "ApiError":
        return cls(
            status_code,
            code=payload.get("code"),
            description=payload.get("description"),
            error_id=payload.get("id"),
            parameter=payload.get("parameter"),
            error_type=payload.get("type"),
        )


class RegistryIntegrityError(RuntimeError):
    """Raised when a trusted-network definition contains an invalid CIDR."""


def decode_error(status_code: int, body: str) -> ApiError:
    """
    Parse the provider error envelope from ``body``.

    A body that is not a JSON object raises :class:`DecodeError` instead.
    """
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise DecodeError(
            f"Failed to parse error envelope (status {status_code}): {body}"
        ) from exc
    if not isinstance(payload, dict):
        raise DecodeError(
            f"Error envelope must be a JSON object (status {status_code}): {body}"
        )

    error = ApiError.from_payload(status_code, payload)
    logging.warning(
        "API responded with %s: code=%s id=%s", status_code, error.code, error.id
    )
    return error
