import pytest

from sfauth.config.model import SessionConfig
from sfauth.logging_config import error_aggregator
from sfauth.session.coordinator import SessionCoordinator
from tests.fixtures.session_fakes import LOGIN_URL, FakeHttpSession


@pytest.fixture
def session_config() -> SessionConfig:
    return SessionConfig(
        login_url=LOGIN_URL + "/",
        client_id="cid-123",
        client_secret="csecret-456",
        username="user@example.com",
        password="pw-789",
        timeout_ms=5000,
    )


@pytest.fixture
def fake_http() -> FakeHttpSession:
    return FakeHttpSession()


@pytest.fixture
def coordinator(fake_http, session_config) -> SessionCoordinator:
    return SessionCoordinator(fake_http, session_config)


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    yield
    error_aggregator.reset()
