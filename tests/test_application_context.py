"""Tests for sfauth/application_context.py."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from sfauth.application_context import ApplicationContext
from sfauth.errors.internal import ProtocolError
from tests.fixtures.session_fakes import REVOKE_PATH, TOKEN_PATH, FakeResp, login_body


@pytest.mark.asyncio
async def test_start_logs_in_once(session_config, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")))
    ctx = await ApplicationContext.create(session_config, fake_http)

    await ctx.start()
    await ctx.start()

    assert ctx.started
    assert ctx.coordinator.access_token == "tok-1"
    assert fake_http.count("POST") == 1


@pytest.mark.asyncio
async def test_shutdown_logs_out_and_closes_session(session_config, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")))
    fake_http.add("GET", REVOKE_PATH, FakeResp(200))
    ctx = await ApplicationContext.create(session_config, fake_http)
    coordinator = ctx.coordinator

    async with ctx:
        assert coordinator.access_token == "tok-1"

    assert coordinator.access_token is None
    assert fake_http.count("GET", REVOKE_PATH) == 1
    assert fake_http.closed
    assert ctx.session is None
    assert not ctx.started


@pytest.mark.asyncio
async def test_shutdown_logout_error_is_logged(session_config, fake_http, caplog):
    caplog.set_level(logging.ERROR)
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")))
    fake_http.add("GET", REVOKE_PATH, FakeResp(500))
    ctx = await ApplicationContext.create(session_config, fake_http)
    await ctx.start()

    await ctx.shutdown()

    assert "Error during logout at shutdown" in caplog.text
    assert fake_http.closed


@pytest.mark.asyncio
async def test_shutdown_reports_error_summary(session_config, fake_http, caplog):
    caplog.set_level(logging.WARNING)
    fake_http.add("POST", TOKEN_PATH, FakeResp(200, login_body("tok-1")))
    fake_http.add("GET", REVOKE_PATH, FakeResp(500))
    ctx = await ApplicationContext.create(session_config, fake_http)
    await ctx.start()

    await ctx.shutdown()

    summary = [r for r in caplog.records if "ERROR SUMMARY REPORT" in r.getMessage()]
    assert len(summary) == 1
    assert summary[0].levelno == logging.WARNING
    assert "protocol: 1 total" in caplog.text


@pytest.mark.asyncio
async def test_failed_start_in_context_manager_closes_session(session_config, fake_http):
    fake_http.add("POST", TOKEN_PATH, FakeResp(500))
    ctx = await ApplicationContext.create(session_config, fake_http)

    with pytest.raises(ProtocolError):
        async with ctx:
            pass

    assert fake_http.closed


@pytest.mark.asyncio
async def test_shutdown_http_session_error():
    """Close errors are logged, not raised."""
    ctx = ApplicationContext()
    ctx.session = MagicMock()
    ctx.session.close = AsyncMock(side_effect=OSError("Close failed"))
    await ctx.shutdown()
    assert ctx.session is None


@pytest.mark.asyncio
async def test_start_without_coordinator():
    ctx = ApplicationContext()
    await ctx.start()
    assert ctx.started
