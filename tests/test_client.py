from __future__ import annotations

import asyncio

import httpx
import pytest

from account_mcp.api.client import AccountAPIClient, AccountAPIError
from account_mcp.api.token import AuthToken
from account_mcp.config import Settings
from conftest import FakeAccountAPI, drop_connection, json_response


TOKEN = AuthToken(access_token="abc123", raw={"token": "abc123"})


def test_fetch_sends_bearer_and_account_headers(settings: Settings) -> None:
    api = FakeAccountAPI()
    client = AccountAPIClient(settings, transport=api.transport)

    data = asyncio.run(client.fetch("/accounts", TOKEN))

    assert data == {"id": "acct1", "balance": 42}
    request = api.calls("GET")[0]
    assert str(request.url) == "https://api.test/accounts"
    assert request.headers["authorization"] == "Bearer abc123"
    assert request.headers["x-account-id"] == "acct1"


@pytest.mark.parametrize("body", [{}, []])
def test_fetch_empty_json_is_success(settings: Settings, body: object) -> None:
    api = FakeAccountAPI(accounts=json_response(200, body))

    data = asyncio.run(AccountAPIClient(settings, transport=api.transport).fetch("/accounts", TOKEN))

    assert data == body


@pytest.mark.parametrize(
    ("status", "kind"),
    [(401, "authorization"), (403, "authorization"), (404, "client"), (500, "server"), (503, "server")],
)
def test_fetch_http_errors_are_classified(settings: Settings, status: int, kind: str) -> None:
    api = FakeAccountAPI(accounts=json_response(status, {"error": "boom"}))

    with pytest.raises(AccountAPIError) as exc_info:
        asyncio.run(AccountAPIClient(settings, transport=api.transport).fetch("/accounts", TOKEN))

    assert exc_info.value.kind == kind
    assert exc_info.value.status_code == status


def test_fetch_network_drop(settings: Settings) -> None:
    api = FakeAccountAPI(accounts=drop_connection)

    with pytest.raises(AccountAPIError) as exc_info:
        asyncio.run(AccountAPIClient(settings, transport=api.transport).fetch("/accounts", TOKEN))

    assert exc_info.value.kind == "network"
    assert exc_info.value.status_code is None
    assert "ConnectError" in str(exc_info.value)


def test_fetch_invalid_json(settings: Settings) -> None:
    api = FakeAccountAPI(accounts=lambda request: httpx.Response(200, content=b"not json"))

    with pytest.raises(AccountAPIError) as exc_info:
        asyncio.run(AccountAPIClient(settings, transport=api.transport).fetch("/accounts", TOKEN))

    assert exc_info.value.kind == "parse"


def test_fetch_concatenates_endpoint_literally(settings: Settings) -> None:
    settings.api.base_url = "https://api.test/v1"
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"ok": True})

    client = AccountAPIClient(settings, transport=httpx.MockTransport(handler))
    asyncio.run(client.fetch("/accounts", TOKEN))

    assert seen == ["https://api.test/v1/accounts"]


@pytest.mark.parametrize("status", [301, 302, 304, 307])
def test_fetch_rejects_non_2xx_redirect_status(settings: Settings, status: int) -> None:
    api = FakeAccountAPI(accounts=json_response(status, {"moved": True}))

    with pytest.raises(AccountAPIError) as exc_info:
        asyncio.run(AccountAPIClient(settings, transport=api.transport).fetch("/accounts", TOKEN))

    assert exc_info.value.kind == "redirect"
    assert exc_info.value.status_code == status


def test_fetch_follows_redirect_to_data(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/accounts":
            return httpx.Response(307, headers={"Location": "/v2/accounts"})
        assert request.headers["authorization"] == "Bearer abc123"
        return httpx.Response(200, json={"id": "acct1"})

    client = AccountAPIClient(settings, transport=httpx.MockTransport(handler))

    assert asyncio.run(client.fetch("/accounts", TOKEN)) == {"id": "acct1"}
