"""Shared configuration and wire schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_CHECK_IP_URL = "https://api.ipify.org"
DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_INTERVAL_MINUTES = 10
MAX_INTERVAL_MINUTES = 7 * 24 * 60
DEFAULT_REQUEST_TIMEOUT = 10.0


class AgentConfig(BaseModel):
    """Settings loaded once at startup.

    The provider fields are allowed to be empty here; they are checked on
    every update attempt so a half-configured agent still runs and logs.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    interval_minutes: int = Field(
        default=DEFAULT_INTERVAL_MINUTES, gt=0, le=MAX_INTERVAL_MINUTES
    )
    api_token: str = ""
    zone_id: str = ""
    record_id: str = ""
    record_name: str = ""
    check_ip_url: str = DEFAULT_CHECK_IP_URL
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)

    def missing_provider_settings(self) -> List[str]:
        required = {
            "CF_API_TOKEN": self.api_token,
            "CF_ZONE_ID": self.zone_id,
            "CF_RECORD_ID": self.record_id,
            "CF_RECORD_NAME": self.record_name,
        }
        return [name for name, value in required.items() if not value]

    @property
    def interval_seconds(self) -> int:
        return self.interval_minutes * 60


class DNSRecordUpdate(BaseModel):
    """Desired state of the A record, sent as the PUT body."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str = "A"
    name: str
    content: str
    ttl: int = 1
    proxied: bool = False


class ProviderMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str = ""
    code: Optional[int] = None


class ProviderResponse(BaseModel):
    """The envelope Cloudflare wraps around every API reply."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    errors: List[ProviderMessage] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value: object) -> object:
        return [] if value is None else value

    def error_messages(self) -> List[str]:
        return [error.message for error in self.errors]
