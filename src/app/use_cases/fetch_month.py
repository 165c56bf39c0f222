"""Caso de uso: buscar o calendario de um mes para a camada HTTP.

A camada HTTP (fora deste pacote) extrai o header Authorization e o
mes da query e chama `get_calendar`; a resposta ja vem no formato
final para serializar com `model_dump(mode="json")`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import correlation_scope
from app.services.token_validator import extract_bearer_token
from config.settings import get_upstream_settings

if TYPE_CHECKING:
    from app.domain.calendar import CalendarResponse
    from app.services.calendar_fetcher import CalendarFetcher, FetchOutcome

logger = logging.getLogger(__name__)


async def fetch_month(
    token: str | None,
    year: int | None,
    month: int,
    *,
    fetcher: CalendarFetcher | None = None,
) -> FetchOutcome:
    """Contrato do core: (token, year, month) -> FetchOutcome."""
    if fetcher is None:
        from app.bootstrap import get_calendar_fetcher

        fetcher = get_calendar_fetcher()
    return await fetcher.fetch_month(token, year, month)


async def get_calendar(
    authorization: str | None,
    month: int,
    year: int | None = None,
    *,
    fetcher: CalendarFetcher | None = None,
    correlation_id: str | None = None,
    auth_scheme: str | None = None,
) -> CalendarResponse:
    """Handler do endpoint de calendario.

    Args:
        authorization: Valor cru do header Authorization
        month: Mes (1..12)
        year: Ano; None usa o ano corrente no timezone de referencia
        fetcher: CalendarFetcher (usa o singleton do bootstrap se None)
        correlation_id: ID de rastreamento vindo do transporte
        auth_scheme: Esquema a remover do header (None usa UpstreamSettings.auth_scheme)

    Returns:
        CalendarResponse, tanto no sucesso quanto na falha
    """
    if auth_scheme is None:
        auth_scheme = get_upstream_settings().auth_scheme
    token = extract_bearer_token(authorization, auth_scheme)
    with correlation_scope(correlation_id):
        logger.debug(
            "calendar_handler_triggered",
            extra={"token_length": len(token), "month": month, "year": year},
        )
        outcome = await fetch_month(token, year, month, fetcher=fetcher)
    return outcome.response
