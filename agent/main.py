"""Entry point for the DDNS agent."""

from __future__ import annotations

import logging
import os
import signal
import threading
from typing import Optional

from agent.config import load_config, load_env_file
from agent.core import AgentState, DDNSRunner


def _configure_logging() -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def run_forever(
    runner: DDNSRunner,
    stop_event: threading.Event,
    state: Optional[AgentState] = None,
) -> AgentState:
    """Run a cycle now, then one per interval until ``stop_event`` is set."""
    state = runner.run_once(state or AgentState())
    interval_seconds = runner.config.interval_seconds
    while not stop_event.wait(timeout=interval_seconds):
        state = runner.run_once(state)
    logging.info("Shutting down gracefully...")
    return state


def main() -> int:
    env_loaded = load_env_file()
    _configure_logging()
    if env_loaded:
        logging.info("Loaded environment from env file.")
    config = load_config()
    logging.info(
        "Starting DDNS agent for %s (every %d minutes).",
        config.record_name or "<unset record>",
        config.interval_minutes,
    )
    runner = DDNSRunner(config)
    stop_event = threading.Event()

    def handle_stop(signum: int, frame: Optional[object]) -> None:
        logging.info("Received %s; stopping agent.", signal.Signals(signum).name)
        stop_event.set()

    signal.signal(signal.SIGINT, handle_stop)
    signal.signal(signal.SIGTERM, handle_stop)

    try:
        run_forever(runner, stop_event)
    finally:
        runner.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
