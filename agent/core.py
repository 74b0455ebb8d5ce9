"""Core runner for the DDNS agent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from agent.cloudflare import CloudflareClient
from agent.errors import DDNSError, ProviderError
from agent.observer import PublicIPObserver
from shared_lib.schema import AgentConfig


@dataclass(frozen=True)
class AgentState:
    last_ip: Optional[str] = None


class DDNSRunner:
    """Runs check-and-update cycles for a single DNS record."""

    def __init__(
        self,
        config: AgentConfig,
        session: Optional[requests.Session] = None,
        observer: Optional[PublicIPObserver] = None,
        client: Optional[CloudflareClient] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._observer = observer or PublicIPObserver(
            config.check_ip_url,
            timeout=config.request_timeout,
            session=self._session,
        )
        self._client = client or CloudflareClient(config, session=self._session)

    @property
    def config(self) -> AgentConfig:
        return self._config

    def run_once(self, state: AgentState) -> AgentState:
        """Run one cycle and return the state the next cycle should start from."""
        try:
            return self._run_cycle(state)
        except Exception:  # noqa: BLE001 - a broken cycle must not stop the loop
            logging.exception("Unexpected error during update cycle")
            return state

    def _run_cycle(self, state: AgentState) -> AgentState:
        try:
            current_ip = self._observer.fetch()
        except DDNSError as exc:
            logging.warning("Error checking current IP: %s", exc)
            return state

        logging.info("Current IP: %s", current_ip)

        if state.last_ip == current_ip:
            logging.info("IP has not changed, no update needed.")
            return state

        try:
            self._client.update_record(current_ip)
        except ProviderError as exc:
            logging.error(
                "Cloudflare rejected update of %s to %s: %s",
                self._config.record_name,
                current_ip,
                "; ".join(exc.messages) or "no error details returned",
            )
            return state
        except DDNSError as exc:
            logging.error("Failed to update Cloudflare record: %s", exc)
            return state

        logging.info(
            "Successfully updated Cloudflare DNS record %s to %s",
            self._config.record_name,
            current_ip,
        )
        return AgentState(last_ip=current_ip)

    def close(self) -> None:
        self._observer.close()
        self._client.close()
        self._session.close()
