"""Servicos de aplicacao.

Unidades de orquestracao sem IO direto; o IO fica em app/infra/.
"""

from app.services.calendar_fetcher import CalendarFetcher, FetchOutcome, iter_segments
from app.services.response_normalizer import failure_response, normalize, stable_event_id
from app.services.token_validator import (
    TokenValidation,
    extract_bearer_token,
    validate_token,
)

__all__ = [
    "CalendarFetcher",
    "FetchOutcome",
    "TokenValidation",
    "extract_bearer_token",
    "failure_response",
    "iter_segments",
    "normalize",
    "stable_event_id",
    "validate_token",
]
