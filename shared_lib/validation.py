"""Validation helpers for endpoint URLs and observed addresses."""

from __future__ import annotations

import ipaddress
from urllib.parse import urlparse


def _is_non_public(address: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    return (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_reserved
        or address.is_multicast
        or address.is_unspecified
    )


def validate_url(value: str) -> str:
    """Return ``value`` without a trailing slash if it is a usable endpoint."""
    parsed = urlparse(value)
    if parsed.scheme.lower() != "https":
        raise ValueError("URL must use https://")
    if not parsed.hostname:
        raise ValueError("URL must include a hostname")

    host = parsed.hostname.lower()
    if host == "localhost":
        raise ValueError("URL hostname cannot be localhost")

    try:
        host_address = ipaddress.ip_address(host)
    except ValueError:
        host_address = None

    if host_address is not None and _is_non_public(host_address):
        raise ValueError("URL hostname cannot be a loopback or private IP")

    return value.rstrip("/")


def parse_ipv4(text: str) -> str:
    """Normalize an echo-service reply into a dotted-quad IPv4 string.

    Raises ValueError when the reply is not a single IPv4 address.
    """
    candidate = text.strip()
    if not candidate:
        raise ValueError("empty address")
    try:
        address = ipaddress.IPv4Address(candidate)
    except ipaddress.AddressValueError as exc:
        raise ValueError(f"{candidate!r} is not an IPv4 address") from exc
    return str(address)
