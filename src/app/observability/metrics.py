"""Registro de metricas via structured logging.

As metricas saem como logs estruturados e podem ser agregadas depois
pelo coletor de logs.

Metricas suportadas:
- Latencia: tempo de execucao por componente/operacao
- Resultado da busca: counter por status e codigo de erro
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latencia de operacao.

    Args:
        component: Nome do componente (ex: "calendar_fetcher")
        operation: Nome da operacao (ex: "fetch_month")
        latency_ms: Latencia em milissegundos
        correlation_id: ID de correlacao para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_fetch_outcome(
    status: int,
    error_code: str | None = None,
    segments: int = 0,
    correlation_id: str | None = None,
) -> None:
    """Registra o resultado de uma busca mensal.

    Args:
        status: Status exposto ao caller
        error_code: Codigo curto do erro (None no sucesso)
        segments: Quantidade de segmentos buscados
        correlation_id: ID de correlacao para rastreamento
    """
    logger.info(
        "metric_fetch_outcome",
        extra={
            "metric_type": "counter",
            "status": status,
            "error_code": error_code,
            "segments": segments,
            "correlation_id": correlation_id,
        },
    )
