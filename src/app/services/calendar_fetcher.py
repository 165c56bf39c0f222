"""Orquestracao da busca mensal de calendario.

Fluxo por chamada: valida token, abre sessao, pagina os segmentos do
mes, normaliza e devolve um FetchOutcome. Todo estado (FSM, buffer de
agregacao, cursor de pagina, sessao) e local a chamada.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncGenerator, Callable
from contextlib import aclosing
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from app.domain.calendar import CalendarResponse, RawCalendarSegment, TargetMonth
from app.observability import LoggingFetchObserver, get_correlation_id
from app.services.response_normalizer import failure_response, normalize
from app.services.token_validator import MISSING_CREDENTIAL, validate_token
from fsm import FetchState, FetchStateMachine, create_fsm
from utils.errors import (
    AuthError,
    CalendarFetchError,
    CredentialError,
    FetchTimeoutError,
    InvalidMonthError,
    NetworkError,
    NoDataError,
    UpstreamError,
)

if TYPE_CHECKING:
    from app.domain.calendar import UpstreamSession
    from app.protocols.fetch_observer import FetchObserverProtocol
    from app.protocols.upstream_session import UpstreamSessionProtocol
    from config.settings import UpstreamSettings

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = "Missing authentication token"

_MESSAGES: dict[type[CalendarFetchError], str] = {
    InvalidMonthError: "Invalid month",
    AuthError: "Invalid or expired authentication token",
    NoDataError: "No calendar data available for the requested month",
    NetworkError: "Calendar source unavailable",
    UpstreamError: "Unexpected response from calendar source",
    FetchTimeoutError: "Calendar fetch timed out",
}


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Resultado tipado da busca.

    Attributes:
        response: CalendarResponse pronta para serializar
        error: Erro tipado (None no sucesso)
        state: Estado final da FSM (DONE ou FAILED)
        segments_fetched: Segmentos buscados (descartados se houve falha)
    """

    response: CalendarResponse
    error: CalendarFetchError | None = None
    state: FetchState = FetchState.DONE
    segments_fetched: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


async def iter_segments(
    session_client: UpstreamSessionProtocol,
    session: UpstreamSession,
    target: TargetMonth,
    *,
    max_pages: int,
    before_fetch: Callable[[str], None] | None = None,
) -> AsyncGenerator[RawCalendarSegment, None]:
    """Sequencia lazy e finita dos segmentos do mes.

    Termina quando o upstream devolve `next_page_token` vazio. Se
    `max_pages` for atingido sem fim de paginacao, levanta UpstreamError.
    """
    page_token = ""
    for _ in range(max_pages):
        if before_fetch is not None:
            before_fetch(page_token)
        segment = await session_client.fetch_segment(session, target, page_token)
        yield segment
        if segment.is_last:
            return
        page_token = segment.next_page_token or ""
    raise UpstreamError("pagination_limit_exceeded")


class CalendarFetcher:
    """Busca um mes inteiro no upstream e devolve resposta normalizada.

    A instancia e segura para uso concorrente: nada mutavel vive nela,
    apenas colaboradores injetados na construcao.
    """

    __slots__ = ("_clock", "_observer", "_session_client", "_settings")

    def __init__(
        self,
        session_client: UpstreamSessionProtocol,
        settings: UpstreamSettings,
        *,
        observer: FetchObserverProtocol | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._session_client = session_client
        self._settings = settings
        self._observer = observer or LoggingFetchObserver()
        self._clock = clock or (lambda: datetime.now(UTC))

    async def fetch_month(self, token: str | None, year: int | None, month: int) -> FetchOutcome:
        """Busca o mes (year, month); year None usa o ano corrente.

        Nunca levanta para falhas da busca: todas viram FetchOutcome com
        error preenchido. Cancelamento do caller propaga normalmente.
        """
        machine = create_fsm(uuid4().hex[:12])
        started = time.perf_counter()
        buffer: list[RawCalendarSegment] = []
        target: TargetMonth | None = None
        try:
            validation = validate_token(token, max_length=self._settings.max_token_length)
            if not validation.ok:
                reason = validation.reason or MISSING_CREDENTIAL
                raise CredentialError(reason.replace(" ", "_"))
            target = self._resolve_target(year, month)

            async with asyncio.timeout(self._settings.fetch_deadline_seconds):
                self._advance(machine, FetchState.SESSION_OPENING, "token_accepted")
                session = await self._session_client.open_session((token or "").strip())

                def _before_fetch(page_token: str) -> None:
                    trigger = "next_page" if page_token else "session_opened"
                    self._advance(machine, FetchState.FETCHING, trigger)

                pages = iter_segments(
                    self._session_client,
                    session,
                    target,
                    max_pages=self._settings.max_pages,
                    before_fetch=_before_fetch,
                )
                async with aclosing(pages):
                    async for segment in pages:
                        buffer.append(segment)
                        self._notify(machine, "on_segment", machine.segment_index, segment)

            self._advance(
                machine,
                FetchState.AGGREGATING,
                "pagination_finished",
                {"segments": len(buffer)},
            )
            response = normalize(buffer, target)
            self._advance(
                machine,
                FetchState.DONE,
                "normalized",
                {"entries": len(response.calendar)},
            )
        except CalendarFetchError as exc:
            return self._fail(machine, exc, target, len(buffer), started)
        except TimeoutError:
            error = FetchTimeoutError("fetch_deadline_exceeded")
            return self._fail(machine, error, target, len(buffer), started)
        except Exception:
            logger.exception(
                "calendar_fetch_unexpected_error",
                extra={
                    "fetch_id": machine.fetch_id,
                    "state": machine.current_state.name,
                    "correlation_id": get_correlation_id(),
                },
            )
            error = UpstreamError("internal_error")
            return self._fail(machine, error, target, len(buffer), started)

        self._notify(machine, "on_complete", target, response, _elapsed_ms(started))
        return FetchOutcome(
            response=response,
            state=machine.current_state,
            segments_fetched=len(buffer),
        )

    def _resolve_target(self, year: int | None, month: int) -> TargetMonth:
        timezone = self._settings.calendar_timezone
        try:
            if year is None:
                year = TargetMonth.current(timezone, self._clock()).year
            return TargetMonth(year=year, month=month, timezone=timezone)
        except (TypeError, ValueError) as exc:
            raise InvalidMonthError("invalid_month") from exc

    def _advance(
        self,
        machine: FetchStateMachine,
        target: FetchState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        result = machine.transition(target, trigger, metadata)
        if not result.success or result.transition is None:
            raise RuntimeError(result.error_reason)
        self._notify(machine, "on_transition", result.transition)

    def _fail(
        self,
        machine: FetchStateMachine,
        error: CalendarFetchError,
        target: TargetMonth | None,
        partial_segments: int,
        started: float,
    ) -> FetchOutcome:
        # Buffer parcial so aparece na contagem do log, nunca na resposta.
        if not machine.is_terminal:
            self._advance(
                machine,
                FetchState.FAILED,
                "fetch_failed",
                {"error_code": error.code, "status": error.status},
            )
        self._notify(
            machine, "on_failure", target, error, partial_segments, _elapsed_ms(started)
        )
        return FetchOutcome(
            response=failure_response(error.status, self._message_for(error)),
            error=error,
            state=machine.current_state,
            segments_fetched=partial_segments,
        )

    def _notify(self, machine: FetchStateMachine, hook: str, *args: Any) -> None:
        # Falha do observer nunca altera o resultado da busca.
        try:
            getattr(self._observer, hook)(machine.fetch_id, *args)
        except Exception:
            logger.exception(
                "fetch_observer_failed",
                extra={
                    "fetch_id": machine.fetch_id,
                    "hook": hook,
                    "correlation_id": get_correlation_id(),
                },
            )

    def _message_for(self, error: CalendarFetchError) -> str:
        if isinstance(error, CredentialError):
            message = (
                MISSING_TOKEN_MESSAGE
                if error.code == "missing_credential"
                else "Malformed authentication token"
            )
        else:
            message = next(
                (text for kind, text in _MESSAGES.items() if isinstance(error, kind)),
                _MESSAGES[UpstreamError],
            )
        if self._settings.expose_error_details:
            return f"{message} ({error.code})"
        return message


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
