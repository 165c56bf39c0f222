"""Fake em memoria do client de sessao para testes deterministas."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from app.domain.calendar import (
    RawCalendarRecord,
    RawCalendarSegment,
    TargetMonth,
    UpstreamSession,
)
from utils.errors import CalendarFetchError


def make_records(*items: dict[str, Any]) -> tuple[RawCalendarRecord, ...]:
    return tuple(RawCalendarRecord.model_validate(item) for item in items)


class FakeUpstreamSession:
    """Implementa o protocolo sem IO.

    `pages` e a lista de paginas na ordem; a pagina K aponta para K+1 e a
    ultima devolve next_page_token vazio. `endless=True` sempre devolve
    proximo token. Erros agendados em `segment_errors` sao levantados nas
    chamadas correspondentes (indice 0 = primeira chamada).
    """

    def __init__(
        self,
        pages: Sequence[Sequence[dict[str, Any]]] = ((),),
        *,
        open_error: CalendarFetchError | None = None,
        segment_errors: dict[int, CalendarFetchError] | None = None,
        endless: bool = False,
        segment_delay: float = 0.0,
    ) -> None:
        self._pages = [make_records(*page) for page in pages]
        self._open_error = open_error
        self._segment_errors = dict(segment_errors or {})
        self._endless = endless
        self._segment_delay = segment_delay
        self.open_calls: list[str] = []
        self.segment_calls: list[str] = []
        self.targets: list[TargetMonth] = []

    @property
    def total_calls(self) -> int:
        return len(self.open_calls) + len(self.segment_calls)

    async def open_session(self, token: str) -> UpstreamSession:
        self.open_calls.append(token)
        if self._open_error is not None:
            raise self._open_error
        return UpstreamSession(session_id="sess-fake", cookies=(("sid", "abc"),))

    async def fetch_segment(
        self,
        session: UpstreamSession,
        target: TargetMonth,
        page_token: str = "",
    ) -> RawCalendarSegment:
        call_index = len(self.segment_calls)
        self.segment_calls.append(page_token)
        self.targets.append(target)
        if self._segment_delay:
            await asyncio.sleep(self._segment_delay)
        if call_index in self._segment_errors:
            raise self._segment_errors[call_index]

        if self._endless:
            return RawCalendarSegment(
                records=(),
                page_token=page_token,
                next_page_token=f"page-{call_index + 1}",
            )

        page_index = int(page_token.removeprefix("page-")) if page_token else 0
        is_last = page_index >= len(self._pages) - 1
        return RawCalendarSegment(
            records=self._pages[page_index],
            page_token=page_token,
            next_page_token=None if is_last else f"page-{page_index + 1}",
        )
