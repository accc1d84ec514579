import httpx
import pytest

from mpesa_client.error_handler import AuthError
from mpesa_client.integrations.clients.real_http.oauth import (
    create_authenticated_client,
    fetch_access_token,
)
from mpesa_client.integrations.contracts.interfaces import Environment
from mpesa_client.utils.config_loader import DarajaConfig


@pytest.mark.asyncio
async def test_fetch_access_token_returns_token():
    def handler(request):
        assert request.method == "GET"
        assert request.url.path == "/oauth/v1/generate"
        return httpx.Response(200, json={"access_token": "abc123", "expires_in": "3599"})

    token = await fetch_access_token(
        "key", "secret", Environment.SANDBOX, config=DarajaConfig(), transport=httpx.MockTransport(handler)
    )

    assert token == "abc123"


@pytest.mark.asyncio
async def test_missing_access_token_is_an_auth_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"expires_in": "3599"}))

    with pytest.raises(AuthError) as excinfo:
        await fetch_access_token("key", "secret", "sandbox", config=DarajaConfig(), transport=transport)

    assert excinfo.value.payload == {"expires_in": "3599"}


@pytest.mark.asyncio
async def test_network_failure_is_an_auth_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AuthError) as excinfo:
        await fetch_access_token(
            "key", "secret", "sandbox", config=DarajaConfig(), transport=httpx.MockTransport(handler)
        )

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_non_json_rejection_keeps_text_body():
    transport = httpx.MockTransport(lambda request: httpx.Response(400, text="Bad Request"))

    with pytest.raises(AuthError) as excinfo:
        await fetch_access_token("key", "secret", "sandbox", config=DarajaConfig(), transport=transport)

    assert excinfo.value.status_code == 400
    assert excinfo.value.payload == "Bad Request"


@pytest.mark.asyncio
async def test_authenticated_client_is_preconfigured():
    cfg = DarajaConfig(timeout_seconds=7.5)

    client = create_authenticated_client("tok", Environment.PRODUCTION, config=cfg)
    async with client:
        assert client.base_url.host == "api.safaricom.co.ke"
        assert client.headers["Authorization"] == "Bearer tok"
        assert client.headers["Content-Type"] == "application/json"
        assert client.timeout.read == 7.5


def test_each_call_builds_a_new_client():
    cfg = DarajaConfig()
    first = create_authenticated_client("tok", "sandbox", config=cfg)
    second = create_authenticated_client("tok", "sandbox", config=cfg)
    assert first is not second
