import logging

import pytest

from sfauth.errors.handling import error_category, log_error
from sfauth.errors.internal import (
    ConfigurationError,
    DecodeError,
    InternalError,
    ProtocolError,
    SessionExpiredError,
    TransportError,
    TransportFailure,
)
from sfauth.logging_config import error_aggregator


@pytest.mark.parametrize(
    "error,category",
    [
        (ConfigurationError("x"), "config"),
        (TransportError("x", kind=TransportFailure.TIMEOUT), "network"),
        (ConnectionError("x"), "network"),
        (ProtocolError("x", status_code=500), "protocol"),
        (SessionExpiredError("tok"), "protocol"),
        (DecodeError("x"), "parsing"),
        (InternalError("x"), "internal"),
        (ValueError("x"), "unknown"),
    ],
)
def test_error_category(error, category):
    assert error_category(error) == category


def test_internal_error_copies_data():
    data = {"a": 1}
    err = InternalError("x", data=data)
    data["a"] = 2
    assert err.data == {"a": 1}


def test_transport_error_records_kind():
    err = TransportError("slow", kind=TransportFailure.TIMEOUT)
    assert err.data == {"kind": "timeout"}


def test_log_error_includes_context_and_aggregates(caplog):
    caplog.set_level(logging.ERROR)
    err = ProtocolError("Login error status:[503] reason:[Unavailable]", status_code=503, description="Unavailable")

    log_error("Login failed", err, context={"user": "u"})

    assert "[PROTOCOL] Login failed" in caplog.text
    assert "status_code=503" in caplog.text
    assert "user=u" in caplog.text
    assert error_aggregator.get_error_summary()["protocol"]["total_count"] == 1
