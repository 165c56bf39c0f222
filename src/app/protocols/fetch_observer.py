"""Hooks de observabilidade injetados no fetcher.

Mantem logs e metricas fora da regra de negocio: o fetcher apenas
notifica, e cada implementacao decide o que registrar.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.calendar import CalendarResponse, RawCalendarSegment, TargetMonth
    from fsm.types import StateTransition
    from utils.errors import CalendarFetchError


@runtime_checkable
class FetchObserverProtocol(Protocol):
    """Eventos emitidos durante uma busca mensal."""

    def on_transition(self, fetch_id: str, transition: StateTransition) -> None: ...

    def on_segment(
        self,
        fetch_id: str,
        segment_index: int,
        segment: RawCalendarSegment,
    ) -> None: ...

    def on_failure(
        self,
        fetch_id: str,
        target: TargetMonth | None,
        error: CalendarFetchError,
        partial_segments: int,
        elapsed_ms: float,
    ) -> None: ...

    def on_complete(
        self,
        fetch_id: str,
        target: TargetMonth,
        response: CalendarResponse,
        elapsed_ms: float,
    ) -> None: ...
