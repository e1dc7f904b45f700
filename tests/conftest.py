"""Shared fixtures for proxy tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from core.config import Config, UpstreamSettings
from services.proxy_handler import ProxyHandler
from services.upstream import UpstreamClient

TEST_API_KEY = "sk-test-0123456789abcdef"

Responder = Callable[[httpx.Request], httpx.Response]


class RecordingLogger:
    """RequestLogger double that keeps every call."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, Any]] = []
        self.successes: list[str] = []
        self.upstream_errors: list[tuple[int, str]] = []
        self.errors: list[str] = []

    def log_request(self, model: str, body: dict[str, Any]) -> None:
        self.requests.append((model, body))

    def log_success(self, model: str) -> None:
        self.successes.append(model)

    def log_upstream_error(self, status: int, message: str) -> None:
        self.upstream_errors.append((status, message))

    def log_error(self, message: str) -> None:
        self.errors.append(message)


class StubUpstream:
    """Canned upstream that records what it received."""

    def __init__(self, responder: Responder) -> None:
        self._responder = responder
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self._responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def config() -> Config:
    return Config(upstream=UpstreamSettings(api_key=TEST_API_KEY))


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
async def make_handler(config: Config, logger: RecordingLogger):
    """Build a ProxyHandler wired to a stub upstream."""
    clients: list[httpx.AsyncClient] = []

    def _make(stub: StubUpstream, cfg: Config | None = None) -> ProxyHandler:
        client = httpx.AsyncClient(transport=stub.transport)
        clients.append(client)
        return ProxyHandler(cfg or config, UpstreamClient(client), logger)

    yield _make

    for client in clients:
        await client.aclose()


def json_response(status_code: int, payload: Any) -> Responder:
    return lambda request: httpx.Response(status_code, json=payload)


def text_response(status_code: int, text: str) -> Responder:
    return lambda request: httpx.Response(status_code, text=text)
