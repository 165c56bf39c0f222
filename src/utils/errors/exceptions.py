"""Excecoes tipadas do fluxo de busca de calendario.

Cada excecao carrega um codigo curto (seguro para logs) e o status
HTTP que o caller deve expor. O fetcher converte qualquer uma delas
em CalendarResponse; nenhuma chega crua ao transporte.
"""

from __future__ import annotations


class CalendarFetchError(RuntimeError):
    """Base para falhas da busca mensal de calendario."""

    status: int = 502
    is_retryable: bool = False

    def __init__(self, code: str, status: int | None = None) -> None:
        super().__init__(code)
        self.code = code
        if status is not None:
            self.status = status


class CredentialError(CalendarFetchError):
    """Token ausente ou malformado (falha do caller, nunca retentada)."""

    status = 401


class InvalidMonthError(CalendarFetchError):
    """Par (ano, mes) fora do intervalo aceito."""

    status = 400


class AuthError(CalendarFetchError):
    """Upstream rejeitou o token."""

    status = 401


class NetworkError(CalendarFetchError):
    """Falha transitoria de rede: timeout, conexao, 429 ou 5xx."""

    status = 502
    is_retryable = True

    def __init__(
        self,
        code: str,
        status: int | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(code, status)
        self.upstream_status = upstream_status


class UpstreamError(CalendarFetchError):
    """Payload inesperado ou malformado vindo do upstream."""

    status = 502

    def __init__(
        self,
        code: str,
        status: int | None = None,
        payload_sample: str | None = None,
    ) -> None:
        super().__init__(code, status)
        self.payload_sample = payload_sample


class NoDataError(CalendarFetchError):
    """Mes fora da janela de retencao do upstream."""

    status = 404


class FetchTimeoutError(CalendarFetchError):
    """Deadline local da busca excedido (politica local, nao sinal do upstream)."""

    status = 504
