"""Configuracao centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicializacao (app/bootstrap)
    configure_logging(level="INFO", service_name="calendar_scraper")

    # Em qualquer modulo
    logger = get_logger(__name__)
    logger.info("calendar_fetch_completed", extra={"entries": 3})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SensitiveFieldFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "calendar_scraper"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o servico.

    Deve ser chamada uma vez na inicializacao (app/bootstrap).

    Args:
        level: Nivel de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do servico para identificacao nos logs.
        correlation_id_getter: Funcao que retorna o correlation_id do
            contexto atual (ex: app.observability.get_correlation_id).

    Raises:
        ValueError: Se o nivel de log for invalido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nivel de log invalido: {level}. "
            f"Validos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(SensitiveFieldFilter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicacao
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o modulo especificado."""
    return logging.getLogger(name)


def log_fetch_failure(
    logger: logging.Logger,
    code: str,
    status: int,
    *,
    target: str | None = None,
    elapsed_ms: float | None = None,
    partial_segments: int = 0,
) -> None:
    """Log observavel de busca que terminou em falha (sem token).

    Args:
        logger: Logger instance.
        code: Codigo curto do erro (ex: "pagination_limit_exceeded").
        status: Status exposto ao caller.
        target: Mes alvo no formato YYYY-MM.
        elapsed_ms: Tempo decorrido em ms.
        partial_segments: Segmentos agregados antes da falha (descartados).
    """
    extra: dict[str, object] = {
        "error_code": code,
        "status": status,
        "partial_segments": partial_segments,
    }
    if target:
        extra["target"] = target
    if elapsed_ms is not None:
        extra["elapsed_ms"] = round(elapsed_ms, 2)

    level = logging.WARNING if status < 500 else logging.ERROR
    logger.log(level, "calendar_fetch_failed", extra=extra)
