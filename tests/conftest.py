from __future__ import annotations

import json
from typing import Any, Callable, List, Optional

import pytest
import requests

from shared_lib.schema import AgentConfig


class FakeResponse:
    def __init__(
        self,
        text: str = "",
        status_code: int = 200,
        payload: Any = None,
    ) -> None:
        self.status_code = status_code
        self.text = json.dumps(payload) if payload is not None else text

    def json(self) -> Any:
        return json.loads(self.text)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Stands in for requests.Session; replays queued responses per verb."""

    def __init__(self) -> None:
        self.get_queue: List[Any] = []
        self.put_queue: List[Any] = []
        self.get_calls: List[dict] = []
        self.put_calls: List[dict] = []
        self.closed = False

    def _next(self, queue: List[Any]) -> FakeResponse:
        item = queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.get_calls.append({"url": url, **kwargs})
        return self._next(self.get_queue)

    def put(self, url: str, **kwargs: Any) -> FakeResponse:
        self.put_calls.append({"url": url, **kwargs})
        return self._next(self.put_queue)

    def close(self) -> None:
        self.closed = True


def cloudflare_ok() -> FakeResponse:
    return FakeResponse(payload={"success": True, "errors": [], "result": {"id": "rec"}})


def cloudflare_error(*messages: str, status_code: int = 400) -> FakeResponse:
    return FakeResponse(
        status_code=status_code,
        payload={
            "success": False,
            "errors": [{"code": 1000 + i, "message": m} for i, m in enumerate(messages)],
        },
    )


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def make_config() -> Callable[..., AgentConfig]:
    def _make(**overrides: Optional[str]) -> AgentConfig:
        values = {
            "api_token": "token-123",
            "zone_id": "zone-abc",
            "record_id": "record-def",
            "record_name": "home.example.com",
        }
        values.update(overrides)
        return AgentConfig(**values)

    return _make
