"""Settings base do servico de calendario.

Configuracoes comuns ao processo (ambiente, nome do servico, log).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]


@dataclass(frozen=True)
class BaseSettings:
    """Configuracoes base do sistema.

    Attributes:
        environment: Ambiente de execucao (development|staging|production)
        service_name: Nome do servico para logs
        debug: Modo debug ativo
        log_level: Nivel de log do processo
    """

    environment: Environment = "development"
    service_name: str = "calendar_scraper"
    debug: bool = False
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente e producao."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente e desenvolvimento."""
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Valida configuracoes base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        valid_envs = {"development", "staging", "production"}
        if self.environment not in valid_envs:
            errors.append(f"ENVIRONMENT invalido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME nao pode ser vazio")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Converte string de ambiente para tipo Environment."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variaveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "calendar_scraper"),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instancia cacheada de BaseSettings."""
    return _load_base_from_env()
