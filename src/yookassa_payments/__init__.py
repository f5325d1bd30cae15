"""
Public facade for the YooKassa payouts, refunds and webhook helpers.

The module re-exports the most useful pieces for integrators so they can
``from yookassa_payments import ...`` without navigating the package.
"""

from .api import create_client
from .core import (
    Amount,
    ApiError,
    ClientConfig,
    ClientParameters,
    ConfigError,
    DecodeError,
    Payout,
    PayoutDestination,
    PayoutHandler,
    Refund,
    RefundHandler,
    RefundList,
    RefundListFilter,
    RequestCancelledError,
    SbpBank,
    TrustedNetworkRegistry,
    UnsupportedPayoutTypeError,
    ValidationError,
    YooKassaClient,
    YooKassaError,
    get_trusted_ip_ranges,
    is_notification_ip_trusted,
    load_client_config,
)

__all__ = (
    "Amount",
    "ApiError",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "DecodeError",
    "Payout",
    "PayoutDestination",
    "PayoutHandler",
    "Refund",
    "RefundHandler",
    "RefundList",
    "RefundListFilter",
    "RequestCancelledError",
    "SbpBank",
    "TrustedNetworkRegistry",
    "UnsupportedPayoutTypeError",
    "ValidationError",
    "YooKassaClient",
    "YooKassaError",
    "create_client",
    "get_trusted_ip_ranges",
    "is_notification_ip_trusted",
    "load_client_config",
)
