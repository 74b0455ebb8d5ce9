"""Public address lookup against an IP echo service."""

from __future__ import annotations

from typing import Optional

import requests

from agent.errors import InvalidAddressError, TransportError
from shared_lib.schema import DEFAULT_CHECK_IP_URL, DEFAULT_REQUEST_TIMEOUT
from shared_lib.validation import parse_ipv4


class PublicIPObserver:
    """Asks an echo endpoint for the caller's public IPv4 address."""

    def __init__(
        self,
        check_ip_url: str = DEFAULT_CHECK_IP_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._check_ip_url = check_ip_url
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch(self) -> str:
        try:
            response = self._session.get(self._check_ip_url, timeout=self._timeout)
            response.raise_for_status()
            body = response.text
        except requests.RequestException as exc:
            raise TransportError(f"failed to get current IP: {exc}") from exc

        try:
            return parse_ipv4(body)
        except ValueError as exc:
            raise InvalidAddressError(
                f"{self._check_ip_url} returned an invalid address: {exc}"
            ) from exc

    def close(self) -> None:
        self._session.close()
