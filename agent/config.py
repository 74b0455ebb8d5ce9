"""Environment-backed configuration for the DDNS agent."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from shared_lib.schema import (
    DEFAULT_API_BASE_URL,
    DEFAULT_CHECK_IP_URL,
    DEFAULT_INTERVAL_MINUTES,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_INTERVAL_MINUTES,
    AgentConfig,
)
from shared_lib.validation import validate_url


def load_env_file(path: str | Path | None = None) -> bool:
    """Load a dotenv file into ``os.environ`` without overriding set values."""
    resolved_path = Path(path or os.environ.get("AGENT_ENV_FILE", ".env"))
    if not resolved_path.is_file():
        return False
    return load_dotenv(resolved_path, override=False)


def parse_interval_minutes(raw_value: Optional[str]) -> int:
    try:
        minutes = int(raw_value) if raw_value is not None else None
    except ValueError:
        minutes = None
    if minutes is None or not 0 < minutes <= MAX_INTERVAL_MINUTES:
        logging.warning(
            "Invalid INTERVAL_MINUTES value: %r. Using default interval of %d minutes.",
            raw_value,
            DEFAULT_INTERVAL_MINUTES,
        )
        return DEFAULT_INTERVAL_MINUTES
    return minutes


def parse_timeout(raw_value: Optional[str]) -> float:
    if raw_value is None or not raw_value.strip():
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(raw_value)
    except ValueError:
        timeout = 0.0
    if not math.isfinite(timeout) or timeout <= 0:
        logging.warning(
            "Invalid REQUEST_TIMEOUT_SECONDS value: %r. Using %.0f seconds.",
            raw_value,
            DEFAULT_REQUEST_TIMEOUT,
        )
        return DEFAULT_REQUEST_TIMEOUT
    return timeout


def _endpoint(name: str, raw_value: Optional[str], default: str) -> str:
    if not raw_value:
        return default
    try:
        return validate_url(raw_value.strip())
    except ValueError as exc:
        logging.warning("Ignoring %s=%r (%s); using %s.", name, raw_value, exc, default)
        return default


def load_config(environ: Optional[Mapping[str, str]] = None) -> AgentConfig:
    env = os.environ if environ is None else environ
    return AgentConfig(
        interval_minutes=parse_interval_minutes(env.get("INTERVAL_MINUTES")),
        api_token=env.get("CF_API_TOKEN", "").strip(),
        zone_id=env.get("CF_ZONE_ID", "").strip(),
        record_id=env.get("CF_RECORD_ID", "").strip(),
        record_name=env.get("CF_RECORD_NAME", "").strip(),
        check_ip_url=_endpoint(
            "AGENT_CHECK_IP_URL", env.get("AGENT_CHECK_IP_URL"), DEFAULT_CHECK_IP_URL
        ),
        api_base_url=_endpoint(
            "CF_API_BASE_URL", env.get("CF_API_BASE_URL"), DEFAULT_API_BASE_URL
        ),
        request_timeout=parse_timeout(env.get("REQUEST_TIMEOUT_SECONDS")),
    )
