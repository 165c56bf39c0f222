"""Factories de clientes externos: pool HTTP do upstream."""

from __future__ import annotations

import logging
from functools import lru_cache

import httpx

from app.infra.http import create_async_client
from config.settings import get_upstream_settings

logger = logging.getLogger(__name__)

_MAX_CONNECTIONS = 100
_MAX_KEEPALIVE_CONNECTIONS = 20


@lru_cache(maxsize=1)
def create_upstream_http_pool() -> httpx.AsyncClient:
    """Cria o pool httpx compartilhado entre requisicoes (singleton).

    Cada requisicao pega a propria conexao e devolve ao terminar;
    o AsyncClient e seguro para uso concorrente.
    """
    settings = get_upstream_settings()
    client = create_async_client(
        timeout=settings.request_timeout_seconds,
        limits=httpx.Limits(
            max_connections=_MAX_CONNECTIONS,
            max_keepalive_connections=_MAX_KEEPALIVE_CONNECTIONS,
        ),
        follow_redirects=False,
    )
    logger.info(
        "upstream_http_pool_created",
        extra={"max_connections": _MAX_CONNECTIONS},
    )
    return client


async def close_upstream_http_pool() -> None:
    """Fecha o pool se ja foi criado e limpa o cache da factory."""
    if create_upstream_http_pool.cache_info().currsize:
        await create_upstream_http_pool().aclose()
    create_upstream_http_pool.cache_clear()
