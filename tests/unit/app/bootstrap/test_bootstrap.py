"""Testes do composition root (bootstrap)."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from app.bootstrap import get_calendar_fetcher, initialize_app, shutdown_app
from app.bootstrap.clients import create_upstream_http_pool
from app.services.calendar_fetcher import CalendarFetcher
from config.settings import get_base_settings, get_upstream_settings


@pytest.fixture(autouse=True)
def _fresh_caches() -> Iterator[None]:
    get_base_settings.cache_clear()
    get_upstream_settings.cache_clear()
    get_calendar_fetcher.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_upstream_settings.cache_clear()
    get_calendar_fetcher.cache_clear()


@pytest.mark.asyncio
async def test_fetcher_is_singleton_and_pool_is_shared(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPSTREAM_BASE_URL", "https://calendar.test")

    fetcher = get_calendar_fetcher()

    assert isinstance(fetcher, CalendarFetcher)
    assert get_calendar_fetcher() is fetcher
    assert create_upstream_http_pool() is create_upstream_http_pool()

    await shutdown_app()
    assert create_upstream_http_pool.cache_info().currsize == 0


def test_initialize_app_warns_when_dev_mode_in_production(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DEV_MODE", "1")
    monkeypatch.setenv("LOG_LEVEL", "INFO")

    # configure_logging troca os handlers do root, incluindo o do caplog
    monkeypatch.setattr("app.bootstrap.configure_logging", lambda **_: None)
    caplog.set_level(logging.INFO)

    initialize_app()

    messages = [record.getMessage() for record in caplog.records]
    assert "dev_mode_enabled_in_production" in messages
    assert "app_initialized" in messages


def test_initialize_app_rejects_invalid_settings_in_production(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("SERVICE_NAME", "")
    monkeypatch.setattr("app.bootstrap.configure_logging", lambda **_: None)

    with pytest.raises(ValueError, match="SERVICE_NAME"):
        initialize_app()
