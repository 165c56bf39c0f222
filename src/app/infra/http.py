"""Cliente HTTP base com retry para chamadas ao upstream de calendario."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any

import httpx

from utils.errors import NetworkError

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS = frozenset({408, 429})


def create_async_client(**kwargs: Any) -> httpx.AsyncClient:
    """Cria AsyncClient cujo cookie jar nunca guarda nada.

    O pool e compartilhado entre requisicoes; cookies de sessao do
    upstream viajam no UpstreamSession de cada busca, nunca no client.
    """
    jar = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
    return httpx.AsyncClient(cookies=jar, **kwargs)


@dataclass
class HttpClientConfig:
    """Configuracao do cliente HTTP."""

    timeout_seconds: float = 20.0
    max_retries: int = 3
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 8.0
    default_headers: dict[str, str] = field(default_factory=dict)


class HttpClient:
    """Cliente HTTP com retry exponencial apenas para falhas transitorias.

    O `httpx.AsyncClient` (pool de conexoes) e compartilhado entre
    requisicoes; cada chamada pega e devolve sua propria conexao.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._client = client or create_async_client()
        self._owns_client = client is None

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Executa a chamada e devolve a resposta final.

        Status 408/429/5xx e erros de transporte viram NetworkError e sao
        retentados ate `max_retries`; qualquer outro status e devolvido ao
        caller para classificacao.

        Raises:
            NetworkError: Se as tentativas se esgotarem.
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        for attempt in range(self._config.max_retries + 1):
            try:
                response = await self._client.request(
                    method,
                    url,
                    params=params,
                    headers=merged_headers,
                    timeout=self._config.timeout_seconds,
                )
                if response.status_code in _RETRYABLE_STATUS or response.status_code >= 500:
                    raise NetworkError(
                        "upstream_retryable_status",
                        upstream_status=response.status_code,
                    )
                return response
            except NetworkError as exc:
                if attempt >= self._config.max_retries:
                    raise
                _log_retry(attempt, url, exc.code, exc.upstream_status)
            except (httpx.TimeoutException, httpx.TransportError) as exc:
                if attempt >= self._config.max_retries:
                    raise NetworkError("upstream_connection_error") from exc
                _log_retry(attempt, url, type(exc).__name__, None)
            await _backoff_sleep(
                attempt,
                self._config.backoff_base_seconds,
                self._config.backoff_max_seconds,
            )
        raise NetworkError("upstream_retry_exhausted")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _log_retry(attempt: int, url: str, reason: str, status_code: int | None) -> None:
    logger.warning(
        "upstream_retry",
        extra={
            "attempt": attempt + 1,
            "url": url,
            "reason": reason,
            "upstream_status": status_code,
        },
    )


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
