"""Implementacoes do FetchObserverProtocol."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability.correlation import get_correlation_id
from app.observability.metrics import record_fetch_outcome, record_latency
from config.logging import log_fetch_failure

if TYPE_CHECKING:
    from app.domain.calendar import CalendarResponse, RawCalendarSegment, TargetMonth
    from fsm.types import StateTransition
    from utils.errors import CalendarFetchError

logger = logging.getLogger(__name__)

_COMPONENT = "calendar_fetcher"


class NullFetchObserver:
    """Observer que descarta todos os eventos."""

    def on_transition(self, fetch_id: str, transition: StateTransition) -> None:
        pass

    def on_segment(self, fetch_id: str, segment_index: int, segment: RawCalendarSegment) -> None:
        pass

    def on_failure(
        self,
        fetch_id: str,
        target: TargetMonth | None,
        error: CalendarFetchError,
        partial_segments: int,
        elapsed_ms: float,
    ) -> None:
        pass

    def on_complete(
        self,
        fetch_id: str,
        target: TargetMonth,
        response: CalendarResponse,
        elapsed_ms: float,
    ) -> None:
        pass


class LoggingFetchObserver:
    """Observer padrao: logs estruturados e metricas, nunca o token."""

    def on_transition(self, fetch_id: str, transition: StateTransition) -> None:
        logger.debug(
            "calendar_fetch_transition",
            extra={"fetch_id": fetch_id, **transition.to_log_dict()},
        )

    def on_segment(self, fetch_id: str, segment_index: int, segment: RawCalendarSegment) -> None:
        logger.debug(
            "calendar_segment_fetched",
            extra={
                "fetch_id": fetch_id,
                "segment_index": segment_index,
                "records": len(segment.records),
                "has_next_page": not segment.is_last,
            },
        )

    def on_failure(
        self,
        fetch_id: str,
        target: TargetMonth | None,
        error: CalendarFetchError,
        partial_segments: int,
        elapsed_ms: float,
    ) -> None:
        log_fetch_failure(
            logger,
            error.code,
            error.status,
            target=target.label if target is not None else None,
            elapsed_ms=elapsed_ms,
            partial_segments=partial_segments,
        )
        correlation_id = get_correlation_id()
        record_fetch_outcome(
            error.status,
            error_code=error.code,
            segments=partial_segments,
            correlation_id=correlation_id,
        )
        record_latency(_COMPONENT, "fetch_month", elapsed_ms, correlation_id)

    def on_complete(
        self,
        fetch_id: str,
        target: TargetMonth,
        response: CalendarResponse,
        elapsed_ms: float,
    ) -> None:
        logger.info(
            "calendar_fetch_completed",
            extra={
                "fetch_id": fetch_id,
                "target": target.label,
                "entries": len(response.calendar),
            },
        )
        correlation_id = get_correlation_id()
        record_fetch_outcome(response.status, correlation_id=correlation_id)
        record_latency(_COMPONENT, "fetch_month", elapsed_ms, correlation_id)
