"""Excecoes utilitarias compartilhadas."""

from .exceptions import (
    AuthError,
    CalendarFetchError,
    CredentialError,
    FetchTimeoutError,
    InvalidMonthError,
    NetworkError,
    NoDataError,
    UpstreamError,
)

__all__ = [
    "AuthError",
    "CalendarFetchError",
    "CredentialError",
    "FetchTimeoutError",
    "InvalidMonthError",
    "NetworkError",
    "NoDataError",
    "UpstreamError",
]
