"""Testes da taxonomia de erros da busca."""

from __future__ import annotations

import pytest

from utils.errors import (
    AuthError,
    CalendarFetchError,
    CredentialError,
    FetchTimeoutError,
    InvalidMonthError,
    NetworkError,
    NoDataError,
    UpstreamError,
)


@pytest.mark.parametrize(
    ("error_cls", "status", "retryable"),
    [
        (CredentialError, 401, False),
        (InvalidMonthError, 400, False),
        (AuthError, 401, False),
        (NetworkError, 502, True),
        (UpstreamError, 502, False),
        (NoDataError, 404, False),
        (FetchTimeoutError, 504, False),
    ],
)
def test_status_and_retry_policy(
    error_cls: type[CalendarFetchError], status: int, retryable: bool
) -> None:
    error = error_cls("some_code")

    assert isinstance(error, CalendarFetchError)
    assert error.code == "some_code"
    assert str(error) == "some_code"
    assert error.status == status
    assert error.is_retryable is retryable


def test_status_override_is_per_instance() -> None:
    error = UpstreamError("x", status=503)

    assert error.status == 503
    assert UpstreamError("y").status == 502


def test_extra_diagnostics() -> None:
    assert NetworkError("upstream_retryable_status", upstream_status=503).upstream_status == 503
    assert UpstreamError("bad", payload_sample="{...").payload_sample == "{..."
