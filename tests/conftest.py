"""Configuracao do pytest para o servico de calendario."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config.settings import UpstreamSettings  # noqa: E402


@pytest.fixture
def upstream_settings() -> UpstreamSettings:
    """Settings deterministas: sem backoff real e com limites pequenos."""
    return UpstreamSettings(
        upstream_base_url="https://calendar.test",
        backoff_base_seconds=0.0,
        backoff_max_seconds=0.0,
        max_retries=3,
        max_pages=5,
        fetch_deadline_seconds=5.0,
        calendar_timezone="Asia/Kolkata",
    )
