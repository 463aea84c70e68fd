"""Shared fixtures: an in-memory gateway behind httpx.MockTransport."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from hms_console.clients.registry import HospitalClients
from hms_console.config import ConsoleConfig

GATEWAY_URL = "http://gateway.test"


def ok(data: Any, message: str = "OK") -> dict[str, Any]:
    """A successful response envelope."""
    return {"success": True, "message": message, "data": data}


class RecordedRequest:
    """What the fake gateway saw for one request."""

    def __init__(self, request: httpx.Request):
        self.method = request.method
        self.path = request.url.path
        self.params = dict(request.url.params)
        self.headers = request.headers
        self.body = json.loads(request.content) if request.content else None


class FakeGateway:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self):
        self.responses: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[RecordedRequest] = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        """Answer `method path` with a JSON body."""
        self.responses[(method, path)] = lambda request: httpx.Response(status, json=body)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responses[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(RecordedRequest(request))
        handler = self.responses.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"success": False, "message": f"No route {request.url.path}"})
        return handler(request)

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def config() -> ConsoleConfig:
    return ConsoleConfig(gateway_url=GATEWAY_URL, page_size=20)


@pytest.fixture
def http(gateway: FakeGateway) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=GATEWAY_URL, transport=httpx.MockTransport(gateway.handle))


@pytest.fixture
def clients(config: ConsoleConfig, http: httpx.AsyncClient) -> HospitalClients:
    return HospitalClients(config=config, http=http)
