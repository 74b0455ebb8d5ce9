"""Error types raised by the DDNS agent components."""

from __future__ import annotations

from typing import Iterable, List


class DDNSError(Exception):
    """Base class for failures that abort a single update cycle."""


class ConfigurationError(DDNSError):
    """A required provider setting is missing."""


class TransportError(DDNSError):
    """Network, HTTP, serialization, or decoding failure."""


class InvalidAddressError(TransportError):
    """The echo service replied with something that is not an IPv4 address."""


class ProviderError(DDNSError):
    """The DNS provider answered but reported the update as failed."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages: List[str] = list(messages)
        detail = "; ".join(self.messages) or "no error details returned"
        super().__init__(f"Cloudflare API returned error: {detail}")
