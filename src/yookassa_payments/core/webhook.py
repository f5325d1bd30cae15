"""
Source-address checks for inbound webhook notifications.

YooKassa sends notifications only from a published set of networks
(https://yookassa.ru/developers/using-api/webhooks#ip). Call
:func:`is_notification_ip_trusted` with the peer address of an inbound request
before trusting its payload::

    if not is_notification_ip_trusted(request.remote_addr):
        abort(403)
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from .errors import RegistryIntegrityError

__all__ = [
    "DEFAULT_REGISTRY",
    "TRUSTED_CIDRS",
    "TrustedNetworkRegistry",
    "get_trusted_ip_ranges",
    "is_notification_ip_trusted",
]

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

TRUSTED_CIDRS: Tuple[str, ...] = (
    # IPv4 ranges
    "185.71.76.0/27",
    "185.71.77.0/27",
    "77.75.153.0/25",
    "77.75.154.128/25",
    # Single hosts
    "77.75.156.11/32",
    "77.75.156.35/32",
    # IPv6 range
    "2a02:5180::/32",
)


def _parse_address(value: object) -> Optional[IPAddress]:
    if not isinstance(value, str) or "%" in value:
        return None
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return None

    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


@dataclass(frozen=True)
class TrustedNetworkRegistry:
    """
    Immutable, ordered set of trusted networks.

    ``cidrs`` keeps the literal strings for export; ``networks`` holds the
    parsed form used for matching. Build instances with :meth:`from_cidrs`.
    """

    cidrs: Tuple[str, ...]
    networks: Tuple[IPNetwork, ...]

    @classmethod
    def from_cidrs(cls, cidrs: Iterable[str]) -> "TrustedNetworkRegistry":
        literals = tuple(cidrs)
        networks: List[IPNetwork] = []
        for cidr in literals:
            try:
                networks.append(ipaddress.ip_network(cidr, strict=False))
            except (TypeError, ValueError) as exc:
                raise RegistryIntegrityError(
                    f"Invalid CIDR in trusted ranges: {cidr!r}"
                ) from exc
        return cls(cidrs=literals, networks=tuple(networks))

    def trusted_ranges(self) -> List[str]:
        """Return a fresh list of the CIDR literals in registration order."""
        return list(self.cidrs)

    def is_trusted(self, address: str) -> bool:
        """
        Return ``True`` if ``address`` lies inside any registered network.

        Anything that is not a bare IPv4 or IPv6 literal is untrusted.
        """
        parsed = _parse_address(address)
        if parsed is None:
            return False

        for network in self.networks:
            if network.version == parsed.version and parsed in network:
                return True
        return False

    def __contains__(self, address: object) -> bool:
        return self.is_trusted(address)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self.networks)


DEFAULT_REGISTRY = TrustedNetworkRegistry.from_cidrs(TRUSTED_CIDRS)


def is_notification_ip_trusted(ip: str) -> bool:
    """
    Check whether ``ip`` belongs to the networks YooKassa sends notifications from.
    """
    return DEFAULT_REGISTRY.is_trusted(ip)


def get_trusted_ip_ranges() -> List[str]:
    """
    Return a copy of the trusted CIDR ranges, e.g. for firewall configuration.
    """
    return DEFAULT_REGISTRY.trusted_ranges()
