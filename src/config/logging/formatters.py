"""Formatters de logging estruturado.

Todo log sai como JSON com os campos obrigatorios abaixo, mais o que
for passado em `extra` (ex: status, segment_index, elapsed_ms).
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatorios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-01T10:30:00",
            "level": "INFO",
            "logger": "app.services.calendar_fetcher",
            "message": "calendar_fetch_completed",
            "correlation_id": "abc-123",
            "service": "calendar_scraper",
            "entries": 3
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
