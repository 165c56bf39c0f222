"""Settings de integracao com a fonte remota de calendario.

Centralizar a leitura de env aqui evita que o fetcher consulte flags
globais durante a requisicao: a instancia e passada explicitamente
na construcao.
"""

from __future__ import annotations

import os
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UpstreamSettings(BaseModel):
    """Configuracoes do client de sessao e do fetcher mensal."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    upstream_base_url: str = Field(
        default="http://localhost:8080",
        description="URL base da fonte de calendario.",
    )
    session_path: str = Field(
        default="/api/session",
        description="Endpoint de handshake de sessao.",
    )
    calendar_path: str = Field(
        default="/api/calendar",
        description="Endpoint paginado de eventos do mes.",
    )
    auth_header: str = Field(
        default="Authorization",
        description="Header usado para enviar o token ao upstream.",
    )
    auth_scheme: str = Field(
        default="Bearer",
        description="Prefixo do token no header (vazio para token cru).",
    )
    session_header: str = Field(
        default="X-Session-Id",
        description="Header que carrega o id de sessao nas chamadas seguintes.",
    )
    request_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout de cada chamada HTTP individual.",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        description="Tentativas extras para falhas transitorias de rede.",
    )
    backoff_base_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Base do backoff exponencial entre tentativas.",
    )
    backoff_max_seconds: float = Field(
        default=8.0,
        ge=0,
        description="Teto do backoff entre tentativas.",
    )
    max_pages: int = Field(
        default=50,
        ge=1,
        description="Limite de paginas por mes (valvula contra paginacao infinita).",
    )
    fetch_deadline_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Deadline ponta a ponta da busca (sessao + todas as paginas).",
    )
    calendar_timezone: str = Field(
        default="Asia/Kolkata",
        description="Timezone de referencia para normalizar o mes alvo.",
    )
    max_token_length: int = Field(
        default=4096,
        ge=1,
        description="Tamanho maximo aceito para o token do caller.",
    )
    expose_error_details: bool = Field(
        default=False,
        description="Anexa o codigo interno do erro na mensagem (apenas dev).",
    )
    user_agent: str = Field(
        default="calendar-scraper/1.0",
        description="User-Agent enviado ao upstream.",
    )

    @field_validator("calendar_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ValueError, ZoneInfoNotFoundError) as exc:
            raise ValueError(f"CALENDAR_TIMEZONE invalido: {value!r}") from exc
        return value


def _parse_bool(value: str) -> bool:
    """Converte texto de env em bool com o mesmo padrao dos outros settings."""
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_upstream_from_env() -> UpstreamSettings:
    """Carrega UpstreamSettings a partir de variaveis de ambiente."""
    return UpstreamSettings(
        upstream_base_url=os.getenv("UPSTREAM_BASE_URL", "http://localhost:8080"),
        session_path=os.getenv("UPSTREAM_SESSION_PATH", "/api/session"),
        calendar_path=os.getenv("UPSTREAM_CALENDAR_PATH", "/api/calendar"),
        auth_header=os.getenv("UPSTREAM_AUTH_HEADER", "Authorization"),
        auth_scheme=os.getenv("UPSTREAM_AUTH_SCHEME", "Bearer"),
        session_header=os.getenv("UPSTREAM_SESSION_HEADER", "X-Session-Id"),
        request_timeout_seconds=float(os.getenv("UPSTREAM_REQUEST_TIMEOUT_SECONDS", "20")),
        max_retries=int(os.getenv("UPSTREAM_MAX_RETRIES", "3")),
        backoff_base_seconds=float(os.getenv("UPSTREAM_BACKOFF_BASE_SECONDS", "0.5")),
        backoff_max_seconds=float(os.getenv("UPSTREAM_BACKOFF_MAX_SECONDS", "8")),
        max_pages=int(os.getenv("CALENDAR_MAX_PAGES", "50")),
        fetch_deadline_seconds=float(os.getenv("CALENDAR_FETCH_DEADLINE_SECONDS", "60")),
        calendar_timezone=os.getenv("CALENDAR_TIMEZONE", "Asia/Kolkata"),
        max_token_length=int(os.getenv("CALENDAR_MAX_TOKEN_LENGTH", "4096")),
        expose_error_details=_parse_bool(os.getenv("DEV_MODE", "false")),
        user_agent=os.getenv("UPSTREAM_USER_AGENT", "calendar-scraper/1.0"),
    )


@lru_cache(maxsize=1)
def get_upstream_settings() -> UpstreamSettings:
    """Retorna instancia cacheada de UpstreamSettings."""
    return _load_upstream_from_env()


__all__ = ["UpstreamSettings", "get_upstream_settings"]
