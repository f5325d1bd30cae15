"""
Typed entities exchanged with the payouts and refunds endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from .errors import DecodeError, ValidationError

__all__ = [
    "Amount",
    "CancellationDetails",
    "PAYOUT_TYPE_SBP",
    "Payout",
    "PayoutDestination",
    "Refund",
    "RefundList",
    "RefundListFilter",
    "SbpBank",
    "decode_items",
]

PAYOUT_TYPE_SBP = "sbp"

_CENT = Decimal("0.01")

T = TypeVar("T")


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        # fromisoformat() before 3.11 does not accept the "Z" suffix.
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as exc:
        raise DecodeError(f"Invalid timestamp: {value!r}") from exc


def _format_datetime(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def _compact(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _require(payload: Mapping[str, Any], key: str, entity: str) -> Any:
    try:
        return payload[key]
    except (KeyError, TypeError) as exc:
        raise DecodeError(f"{entity} payload is missing '{key}'") from exc


def _mapping(payload: Any, entity: str) -> Optional[Mapping[str, Any]]:
    if payload is None or isinstance(payload, Mapping):
        return payload
    raise DecodeError(f"{entity} payload must be an object, got {payload!r}")


def decode_items(
    payload: Mapping[str, Any],
    decoder: Callable[[Mapping[str, Any]], T],
    entity: str,
) -> List[T]:
    """Decode the ``items`` array of a list envelope."""
    items = payload.get("items")
    if items is None:
        return []
    if not isinstance(items, list):
        raise DecodeError(f"{entity} list 'items' must be an array, got {items!r}")
    return [decoder(item) for item in items]


@dataclass(frozen=True)
class Amount:
    value: Decimal
    currency: str = "RUB"

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.formatted_value(), "currency": self.currency}

    def formatted_value(self) -> str:
        """
        Render the value with two decimal places.

        Values that would need rounding are rejected, never rounded.
        """
        try:
            value = Decimal(self.value)
            finite = value.is_finite()
            quantized = value.quantize(_CENT) if finite else value
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid amount value: {self.value!r}") from exc
        if not finite:
            raise ValidationError(f"Amount value must be a finite number, got {self.value!r}")
        if quantized != value:
            raise ValidationError(
                f"Amount value {self.value} has more than two decimal places"
            )
        return str(quantized)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Amount":
        raw_value = _require(payload, "value", "Amount")
        try:
            value = Decimal(str(raw_value))
        except InvalidOperation as exc:
            raise DecodeError(f"Invalid amount value: {raw_value!r}") from exc
        return cls(value=value, currency=_require(payload, "currency", "Amount"))


@dataclass(frozen=True)
class CancellationDetails:
    party: str
    reason: str

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> Optional["CancellationDetails"]:
        payload = _mapping(payload, "CancellationDetails")
        if payload is None:
            return None
        return cls(party=payload.get("party", ""), reason=payload.get("reason", ""))


@dataclass(frozen=True)
class PayoutDestination:
    """
    Where the payout goes. Only ``sbp`` transfers are supported.
    """

    type: str = PAYOUT_TYPE_SBP
    phone: Optional[str] = None
    bank_id: Optional[str] = None
    recipient_checked: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "type": self.type,
                "phone": self.phone,
                "bank_id": self.bank_id,
                "recipient_checked": self.recipient_checked,
            }
        )

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> Optional["PayoutDestination"]:
        payload = _mapping(payload, "PayoutDestination")
        if payload is None:
            return None
        return cls(
            type=payload.get("type", ""),
            phone=payload.get("phone"),
            bank_id=payload.get("bank_id"),
            recipient_checked=payload.get("recipient_checked"),
        )


@dataclass(frozen=True)
class SbpBank:
    bank_id: str
    name: str
    bic: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SbpBank":
        return cls(
            bank_id=_require(payload, "bank_id", "SbpBank"),
            name=payload.get("name", ""),
            bic=payload.get("bic", ""),
        )


@dataclass(frozen=True)
class Payout:
    """
    A payout request or a payout returned by the API.

    Requests fill ``amount`` and ``payout_destination_data``; the API answers
    with ``id``, ``status`` and ``payout_destination``.
    """

    amount: Amount
    payout_destination_data: Optional[PayoutDestination] = None
    description: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None
    id: Optional[str] = None
    status: Optional[str] = None
    payout_destination: Optional[PayoutDestination] = None
    created_at: Optional[datetime] = None
    test: Optional[bool] = None
    cancellation_details: Optional[CancellationDetails] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        destination = self.payout_destination_data
        return _compact(
            {
                "amount": self.amount.to_dict(),
                "payout_destination_data": destination.to_dict() if destination else None,
                "description": self.description,
                "metadata": self.metadata,
            }
        )

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Payout":
        return cls(
            amount=Amount.from_dict(_require(payload, "amount", "Payout")),
            payout_destination_data=PayoutDestination.from_dict(
                payload.get("payout_destination_data")
            ),
            description=payload.get("description"),
            metadata=payload.get("metadata"),
            id=payload.get("id"),
            status=payload.get("status"),
            payout_destination=PayoutDestination.from_dict(
                payload.get("payout_destination")
            ),
            created_at=_parse_datetime(payload.get("created_at")),
            test=payload.get("test"),
            cancellation_details=CancellationDetails.from_dict(
                payload.get("cancellation_details")
            ),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class Refund:
    payment_id: str
    amount: Amount
    description: Optional[str] = None
    id: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    cancellation_details: Optional[CancellationDetails] = None
    receipt_registration: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "payment_id": self.payment_id,
                "amount": self.amount.to_dict(),
                "description": self.description,
            }
        )

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Refund":
        return cls(
            payment_id=_require(payload, "payment_id", "Refund"),
            amount=Amount.from_dict(_require(payload, "amount", "Refund")),
            description=payload.get("description"),
            id=payload.get("id"),
            status=payload.get("status"),
            created_at=_parse_datetime(payload.get("created_at")),
            cancellation_details=CancellationDetails.from_dict(
                payload.get("cancellation_details")
            ),
            receipt_registration=payload.get("receipt_registration"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class RefundListFilter:
    created_at_gte: Optional[datetime] = None
    created_at_gt: Optional[datetime] = None
    created_at_lte: Optional[datetime] = None
    created_at_lt: Optional[datetime] = None
    payment_id: Optional[str] = None
    status: Optional[str] = None
    limit: Optional[int] = None
    cursor: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        """Render the filter as query parameters, skipping unset fields."""
        params: Dict[str, str] = {}
        for name, key in (
            ("created_at_gte", "created_at.gte"),
            ("created_at_gt", "created_at.gt"),
            ("created_at_lte", "created_at.lte"),
            ("created_at_lt", "created_at.lt"),
        ):
            value = getattr(self, name)
            if value is not None:
                params[key] = _format_datetime(value)
        for key in ("payment_id", "status", "cursor"):
            value = getattr(self, key)
            if value is not None:
                params[key] = value
        if self.limit is not None:
            params["limit"] = str(self.limit)
        return params


@dataclass(frozen=True)
class RefundList:
    items: List[Refund]
    next_cursor: Optional[str] = None
    type: str = "list"

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RefundList":
        return cls(
            items=decode_items(payload, Refund.from_dict, "Refund"),
            next_cursor=payload.get("next_cursor"),
            type=payload.get("type", "list"),
        )
