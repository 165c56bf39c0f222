"""Contrato do client de sessao com o upstream de calendario.

O fetcher depende apenas deste protocolo; testes usam fakes em memoria
e a implementacao concreta vive em app/infra/calendar.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.calendar import RawCalendarSegment, TargetMonth, UpstreamSession


@runtime_checkable
class UpstreamSessionProtocol(Protocol):
    """Contrato para handshake e busca paginada de um mes."""

    async def open_session(self, token: str) -> UpstreamSession:
        """Abre sessao autenticada.

        Raises:
            AuthError: upstream rejeitou o token.
            NetworkError: falha de conectividade apos retries.
            UpstreamError: resposta com formato inesperado.
        """
        ...

    async def fetch_segment(
        self,
        session: UpstreamSession,
        target: TargetMonth,
        page_token: str = "",
    ) -> RawCalendarSegment:
        """Busca uma pagina do mes alvo; `next_page_token` vazio encerra."""
        ...
