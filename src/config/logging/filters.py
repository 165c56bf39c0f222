"""Filters de logging para contexto e redacao.

Campos injetados:
- correlation_id: ID de rastreamento da requisicao
- service: Nome do servico (ex: calendar_scraper)

Campos redigidos:
- token, authorization, session_id, cookie (nunca vao para o log)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "[redacted]"

SENSITIVE_FIELDS = frozenset({"token", "authorization", "session_id", "cookie", "cookies"})


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Se correlation_id ja foi passado via `extra`, preserva o valor.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Substitui campos sensiveis passados via `extra` por um marcador.

    Nao descarta records; apenas garante que credenciais do caller ou
    ids de sessao do upstream nunca cheguem ao formatter.
    """

    def __init__(self, fields: frozenset[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for field_name in self._fields:
            if field_name in record.__dict__:
                setattr(record, field_name, REDACTED)
        return True
