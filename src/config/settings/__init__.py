"""Agregador de settings do servico de calendario.

Re-exporta todas as settings e funcoes de cada modulo.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Upstream settings
from config.settings.upstream import (
    UpstreamSettings,
    get_upstream_settings,
)

__all__ = [
    "BaseSettings",
    "Environment",
    "UpstreamSettings",
    "get_base_settings",
    "get_upstream_settings",
]
