"""Cloudflare DNS record updates."""

from __future__ import annotations

from typing import Optional

import requests
from pydantic import ValidationError

from agent.errors import ConfigurationError, ProviderError, TransportError
from shared_lib.schema import AgentConfig, DNSRecordUpdate, ProviderResponse


class CloudflareClient:
    """Points one A record at a new address through the Cloudflare v4 API."""

    def __init__(
        self,
        config: AgentConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    def _record_url(self) -> str:
        return (
            f"{self._config.api_base_url}/zones/{self._config.zone_id}"
            f"/dns_records/{self._config.record_id}"
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_token}",
            "Content-Type": "application/json",
        }

    def build_update(self, address: str) -> DNSRecordUpdate:
        return DNSRecordUpdate(name=self._config.record_name, content=address)

    def update_record(self, address: str) -> ProviderResponse:
        """Send the update and return the parsed provider reply.

        Raises ConfigurationError before any network traffic when a provider
        setting is missing, TransportError when the exchange itself fails, and
        ProviderError when Cloudflare reports ``success: false``.
        """
        missing = self._config.missing_provider_settings()
        if missing:
            raise ConfigurationError(
                "missing required environment variables: " + ", ".join(missing)
            )

        try:
            payload = self.build_update(address).model_dump_json()
        except ValidationError as exc:
            raise TransportError(f"failed to build update request: {exc}") from exc

        try:
            response = self._session.put(
                self._record_url(),
                data=payload,
                headers=self._headers(),
                timeout=self._config.request_timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"failed to send update request: {exc}") from exc

        try:
            result = ProviderResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise TransportError(
                f"failed to parse Cloudflare response (HTTP {response.status_code}): {exc}"
            ) from exc

        if not result.success:
            raise ProviderError(result.error_messages())
        return result

    def close(self) -> None:
        self._session.close()
