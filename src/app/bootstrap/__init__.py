"""Bootstrap da aplicacao: inicializacao e wiring.

Este modulo e o composition root: configura logging e conecta a
implementacao concreta do upstream ao CalendarFetcher.

Uso:
    from app.bootstrap import initialize_app, get_calendar_fetcher

    initialize_app()
    fetcher = get_calendar_fetcher()
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.bootstrap.clients import close_upstream_http_pool, create_upstream_http_pool
from app.infra.calendar import create_upstream_session_client
from app.observability import LoggingFetchObserver, get_correlation_id
from app.services.calendar_fetcher import CalendarFetcher
from config.logging import configure_logging
from config.settings import get_base_settings, get_upstream_settings

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging e valida settings.

    Deve ser chamada uma vez no inicio do processo.

    Raises:
        ValueError: settings invalidas em staging/production.
    """
    base = get_base_settings()
    configure_logging(
        level="DEBUG" if base.debug else base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )

    errors = base.validate()
    if errors and base.environment in STRICT_VALIDATION_ENVS:
        raise ValueError(f"Settings invalidas: {'; '.join(errors)}")
    for error in errors:
        logger.warning("settings_validation_warning", extra={"detail": error})

    upstream = get_upstream_settings()
    if upstream.expose_error_details and base.is_production:
        logger.warning("dev_mode_enabled_in_production")

    logger.info(
        "app_initialized",
        extra={
            "environment": base.environment,
            "upstream_base_url": upstream.upstream_base_url,
            "max_pages": upstream.max_pages,
        },
    )


@lru_cache(maxsize=1)
def get_calendar_fetcher() -> CalendarFetcher:
    """Retorna o CalendarFetcher do processo (singleton, sem estado por requisicao)."""
    settings = get_upstream_settings()
    session_client = create_upstream_session_client(settings, create_upstream_http_pool())
    return CalendarFetcher(session_client, settings, observer=LoggingFetchObserver())


async def shutdown_app() -> None:
    """Libera o pool HTTP compartilhado."""
    get_calendar_fetcher.cache_clear()
    await close_upstream_http_pool()


__all__ = ["get_calendar_fetcher", "initialize_app", "shutdown_app"]
