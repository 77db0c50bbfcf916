import asyncio

import pytest

from sfauth.errors.internal import ProtocolError, SessionExpiredError
from sfauth.session.security_handler import AuthenticatedClient
from tests.fixtures.session_fakes import (
    INSTANCE_URL,
    REVOKE_PATH,
    TOKEN_PATH,
    FakeResp,
    error_body,
    login_body,
)

API_PATH = "/services/data/v59.0/limits"


def _accept_only(token):
    def handler(call):
        if call.headers.get("Authorization") == f"Bearer {token}":
            return FakeResp(200, '{"ok": true}')
        return FakeResp(401, '[{"errorCode": "INVALID_SESSION_ID"}]')

    return handler


@pytest.mark.asyncio
async def test_logs_in_before_first_request(coordinator, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")))
    fake_http.add_handler("GET", API_PATH, _accept_only("tok-1"))
    client = AuthenticatedClient(coordinator)

    resp = await client.request("get", API_PATH)

    assert resp.status == 200
    api_call = fake_http.calls[-1]
    assert api_call.url == INSTANCE_URL + API_PATH
    assert api_call.headers["Authorization"] == "Bearer tok-1"


@pytest.mark.asyncio
async def test_unauthorized_triggers_relogin_and_retry(coordinator, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")), FakeResp(200, login_body("tok-2")))
    fake_http.add("GET", REVOKE_PATH, FakeResp(200))
    fake_http.add_handler("GET", API_PATH, _accept_only("tok-2"))
    client = AuthenticatedClient(coordinator)

    resp = await client.request("GET", API_PATH, headers={"Accept": "application/json"})

    assert resp.status == 200
    assert coordinator.access_token == "tok-2"
    api_calls = [c for c in fake_http.calls if API_PATH in c.url]
    assert [c.headers["Authorization"] for c in api_calls] == ["Bearer tok-1", "Bearer tok-2"]
    assert api_calls[0].headers["Accept"] == "application/json"


@pytest.mark.asyncio
async def test_concurrent_unauthorized_requests_share_one_relogin(coordinator, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")), FakeResp(200, login_body("tok-2")), FakeResp(200, login_body("tok-3")))
    fake_http.add("GET", REVOKE_PATH, FakeResp(200))
    fake_http.add_handler("GET", API_PATH, _accept_only("tok-2"))
    await coordinator.login(None)
    client = AuthenticatedClient(coordinator)

    responses = await asyncio.gather(*(client.request("GET", API_PATH) for _ in range(6)))

    assert all(r.status == 200 for r in responses)
    assert fake_http.count("POST", TOKEN_PATH) == 2
    assert coordinator.access_token == "tok-2"


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts(coordinator, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")), FakeResp(200, login_body("tok-2")))
    fake_http.add("GET", REVOKE_PATH, FakeResp(200))
    fake_http.add_handler("GET", API_PATH, _accept_only("never"))
    client = AuthenticatedClient(coordinator, max_attempts=2)

    with pytest.raises(SessionExpiredError) as exc_info:
        await client.request("GET", API_PATH)

    assert exc_info.value.token == "tok-2"
    assert exc_info.value.status_code == 401
    assert fake_http.count("POST", TOKEN_PATH) == 2


@pytest.mark.asyncio
async def test_single_attempt_raises_session_expired_without_relogin(coordinator, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")))
    fake_http.add_handler("GET", API_PATH, _accept_only("never"))
    client = AuthenticatedClient(coordinator, max_attempts=1)

    with pytest.raises(SessionExpiredError) as exc_info:
        await client.request("GET", API_PATH)

    assert exc_info.value.token == "tok-1"
    assert fake_http.count("GET", API_PATH) == 1
    assert fake_http.count("POST", TOKEN_PATH) == 1


@pytest.mark.asyncio
async def test_relogin_failure_propagates(coordinator, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")), FakeResp(400, error_body()))
    fake_http.add("GET", REVOKE_PATH, FakeResp(200))
    fake_http.add_handler("GET", API_PATH, _accept_only("never"))
    client = AuthenticatedClient(coordinator)

    with pytest.raises(ProtocolError):
        await client.request("GET", API_PATH)
    assert coordinator.access_token is None


@pytest.mark.asyncio
async def test_absolute_url_is_used_as_is(coordinator, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")))
    fake_http.add_handler("GET", "https://other.example.com/x", _accept_only("tok-1"))
    client = AuthenticatedClient(coordinator)
    resp = await client.request("GET", "https://other.example.com/x")
    assert resp.status == 200
