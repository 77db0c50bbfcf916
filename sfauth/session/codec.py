"""Credential codec: JSON bodies -> login DTOs."""

from __future__ import annotations

from pydantic import ValidationError

from ..errors.internal import DecodeError
from .types import LoginError, LoginToken


def _summary(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", "invalid payload")
    return f"{loc} {msg}" if loc else msg


def _text(body: str | bytes) -> str:
    if isinstance(body, str):
        return body
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Login error: response parse exception: {e}") from e


def decode_success(body: str | bytes) -> LoginToken:
    """Decode a successful login payload.

    Raises:
        DecodeError: If the body is not UTF-8 JSON or lacks access_token/instance_url.
    """
    text = _text(body)
    try:
        return LoginToken.model_validate_json(text)
    except ValidationError as e:
        raise DecodeError(
            f"Login error: response parse exception: {_summary(e)}"
        ) from e


def decode_error(body: str | bytes) -> LoginError:
    """Decode a login error payload.

    Raises:
        DecodeError: If the body is not UTF-8 JSON or lacks the error code.
    """
    text = _text(body)
    try:
        return LoginError.model_validate_json(text)
    except ValidationError as e:
        raise DecodeError(
            f"Login error: response parse exception: {_summary(e)}"
        ) from e
