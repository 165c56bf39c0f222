"""Observabilidade: correlation_id, metricas e hooks do fetcher.

Uso:
    from app.observability import get_correlation_id, correlation_scope
    from app.observability import LoggingFetchObserver
"""

from app.observability.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.fetch_observer import LoggingFetchObserver, NullFetchObserver
from app.observability.metrics import record_fetch_outcome, record_latency

__all__ = [
    "LoggingFetchObserver",
    "NullFetchObserver",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "record_fetch_outcome",
    "record_latency",
    "reset_correlation_id",
    "set_correlation_id",
]
