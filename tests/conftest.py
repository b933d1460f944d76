from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from account_mcp.config import ApiSettings, Settings


ENV_KEYS = (
    "API_KEY",
    "API_SECRET",
    "ACCOUNT_ID",
    "API_BASE_URL",
    "API_AUTH_PATH",
    "API_ACCOUNTS_ENDPOINT",
    "API_TOKEN_FIELD",
    "API_REQUEST_TIMEOUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "CONFIG_PATH",
)


class FakeAccountAPI:
    """httpx MockTransport 背后的假账户 API, 记录所有请求"""

    def __init__(
        self,
        auth: Callable[[httpx.Request], httpx.Response] | None = None,
        accounts: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> None:
        self.requests: list[httpx.Request] = []
        self._auth = auth or (lambda request: httpx.Response(200, json={"token": "abc123"}))
        self._accounts = accounts or (
            lambda request: httpx.Response(200, json={"id": "acct1", "balance": 42})
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST" and request.url.path == "/auth/token":
            return self._auth(request)
        if request.method == "GET" and request.url.path == "/accounts":
            return self._accounts(request)
        return httpx.Response(404, json={"error": "not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.method == method]


def drop_connection(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection reset by peer", request=request)


def json_response(status: int, body: Any) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, content=json.dumps(body).encode())


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api=ApiSettings(
            key="key-1",
            secret="secret-1",
            account_id="acct1",
            base_url="https://api.test",
        )
    )
