"""
Core primitives: HTTP client, resource handlers, models and webhook checks.
"""

from .client import YooKassaClient
from .config import (
    ClientConfig,
    ClientParameters,
    ConfigError,
    load_client_config,
)
from .environment import ClientEnvironment, build_environment, load_env_file
from .errors import (
    ApiError,
    DecodeError,
    RegistryIntegrityError,
    RequestCancelledError,
    UnsupportedPayoutTypeError,
    ValidationError,
    YooKassaError,
)
from .models import (
    Amount,
    CancellationDetails,
    Payout,
    PayoutDestination,
    Refund,
    RefundList,
    RefundListFilter,
    SbpBank,
)
from .payouts import PayoutHandler
from .refunds import RefundHandler
from .webhook import (
    DEFAULT_REGISTRY,
    TrustedNetworkRegistry,
    get_trusted_ip_ranges,
    is_notification_ip_trusted,
)

__all__ = [
    "Amount",
    "ApiError",
    "CancellationDetails",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "DEFAULT_REGISTRY",
    "DecodeError",
    "Payout",
    "PayoutDestination",
    "PayoutHandler",
    "Refund",
    "RefundHandler",
    "RefundList",
    "RefundListFilter",
    "RegistryIntegrityError",
    "RequestCancelledError",
    "SbpBank",
    "TrustedNetworkRegistry",
    "UnsupportedPayoutTypeError",
    "ValidationError",
    "YooKassaClient",
    "YooKassaError",
    "build_environment",
    "get_trusted_ip_ranges",
    "is_notification_ip_trusted",
    "load_client_config",
    "load_env_file",
]
