"""Tests for the exception hierarchy and its messages."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from vercel_api import (
    APIError,
    AuthenticationError,
    DecodingError,
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    TokenExpiredError,
    UnknownError,
    ValidationError,
    VercelError,
)


def test_messages():
    assert str(AuthenticationError("Invalid token")) == "Authentication failed: Invalid token"
    assert str(TokenExpiredError()) == "API token has expired. Please create a new token."
    assert str(NotFoundError("deployment")) == "Resource not found: deployment"
    assert str(ValidationError("Invalid input")) == "Validation error: Invalid input"
    assert str(APIError("bad_request", "Nope", 400)) == "API error (bad_request): Nope"
    assert str(InvalidResponseError()) == "Invalid response received from API"


def test_rate_limit_message():
    reset = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
    error = RateLimitError(reset)
    assert "Rate limit exceeded" in str(error)
    assert error.reset_at == reset
    assert error.status_code == 429
    assert error.rate_limit_info is None


def test_causes_are_chained():
    cause = ConnectionError("refused")
    assert NetworkError(cause).__cause__ is cause
    assert DecodingError(ValueError("bad")).__cause__ is not None
    assert UnknownError(RuntimeError("?")).__cause__ is not None


@pytest.mark.parametrize(
    "error",
    [
        AuthenticationError("x"),
        TokenExpiredError(),
        RateLimitError(datetime.now(tz=timezone.utc)),
        NetworkError(OSError("x")),
        InvalidResponseError(),
        APIError("c", "m"),
        ValidationError("x"),
        NotFoundError("/x"),
        DecodingError(ValueError("x")),
        UnknownError(Exception("x")),
    ],
)
def test_every_variant_is_a_vercel_error(error):
    assert isinstance(error, VercelError)


def test_status_codes():
    assert AuthenticationError("x").status_code == 401
    assert AuthenticationError("Forbidden", 403).status_code == 403
    assert TokenExpiredError().status_code == 403
    assert NotFoundError("/x").status_code == 404
    assert ValidationError("x").status_code is None
