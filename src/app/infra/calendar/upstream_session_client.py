"""Client concreto de sessao com a fonte remota de calendario."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from app.infra.calendar.upstream_parsers import (
    decode_json,
    parse_segment,
    parse_session,
    raise_for_upstream_status,
)
from app.infra.http import HttpClient, HttpClientConfig
from app.observability import get_correlation_id
from app.protocols.upstream_session import UpstreamSessionProtocol
from utils.errors import CalendarFetchError, UpstreamError

if TYPE_CHECKING:
    from app.domain.calendar import RawCalendarSegment, TargetMonth, UpstreamSession
    from config.settings import UpstreamSettings

logger = logging.getLogger(__name__)

_COMPONENT = "upstream_session_client"


class UpstreamSessionClient(UpstreamSessionProtocol):
    """Implementacao HTTP do protocolo de sessao.

    Handshake: POST no endpoint de sessao com o token do caller.
    Paginas: GET no endpoint de calendario com o id de sessao e cookies.
    """

    __slots__ = ("_http", "_settings")

    def __init__(self, settings: UpstreamSettings, http: HttpClient) -> None:
        self._settings = settings
        self._http = http

    async def open_session(self, token: str) -> UpstreamSession:
        url = self._url(self._settings.session_path)
        try:
            response = await self._http.request("POST", url, headers=self._auth_headers(token))
            raise_for_upstream_status(response, no_data_on_404=False)
            session = parse_session(decode_json(response), dict(response.cookies))
        except CalendarFetchError as exc:
            self._log_error(action="open_session", exc=exc)
            raise
        logger.debug(
            "upstream_session_opened",
            extra={"component": _COMPONENT, "correlation_id": get_correlation_id()},
        )
        return session

    async def fetch_segment(
        self,
        session: UpstreamSession,
        target: TargetMonth,
        page_token: str = "",
    ) -> RawCalendarSegment:
        params = {
            "year": target.year,
            "month": target.month,
            "time_min": target.start.isoformat(),
            "time_max": target.end.isoformat(),
        }
        if page_token:
            params["page_token"] = page_token
        url = self._url(self._settings.calendar_path)
        try:
            response = await self._http.request(
                "GET",
                url,
                params=params,
                headers=self._session_headers(session),
            )
            raise_for_upstream_status(response, no_data_on_404=True)
            return parse_segment(decode_json(response), page_token)
        except CalendarFetchError as exc:
            self._log_error(action="fetch_segment", exc=exc)
            raise

    async def aclose(self) -> None:
        await self._http.aclose()

    def _url(self, path: str) -> str:
        return f"{self._settings.upstream_base_url.rstrip('/')}/{path.lstrip('/')}"

    def _auth_headers(self, token: str) -> dict[str, str]:
        scheme = self._settings.auth_scheme.strip()
        value = f"{scheme} {token}" if scheme else token
        return {self._settings.auth_header: value, "Accept": "application/json"}

    def _session_headers(self, session: UpstreamSession) -> dict[str, str]:
        headers = {
            self._settings.session_header: session.session_id,
            "Accept": "application/json",
        }
        if session.cookies:
            headers["Cookie"] = "; ".join(f"{name}={value}" for name, value in session.cookies)
        return headers

    def _log_error(self, *, action: str, exc: CalendarFetchError) -> None:
        extra: dict[str, object] = {
            "component": _COMPONENT,
            "action": action,
            "error_code": exc.code,
            "error_type": type(exc).__name__,
            "correlation_id": get_correlation_id(),
        }
        if isinstance(exc, UpstreamError) and exc.payload_sample is not None:
            extra["payload_sample"] = exc.payload_sample
        logger.warning("upstream_call_failed", extra=extra)


def create_upstream_session_client(
    settings: UpstreamSettings,
    client: httpx.AsyncClient | None = None,
) -> UpstreamSessionClient:
    """Factory para criar o client com config derivada dos settings.

    Args:
        settings: UpstreamSettings
        client: Pool httpx compartilhado (opcional; criado se None)
    """
    config = HttpClientConfig(
        timeout_seconds=settings.request_timeout_seconds,
        max_retries=settings.max_retries,
        backoff_base_seconds=settings.backoff_base_seconds,
        backoff_max_seconds=settings.backoff_max_seconds,
        default_headers={"User-Agent": settings.user_agent},
    )
    return UpstreamSessionClient(settings, HttpClient(config, client))
