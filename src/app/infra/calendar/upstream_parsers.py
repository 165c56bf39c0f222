"""Helpers internos de parsing para respostas do upstream de calendario."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.domain.calendar import RawCalendarRecord, RawCalendarSegment, UpstreamSession
from utils.errors import AuthError, NoDataError, UpstreamError

if TYPE_CHECKING:
    import httpx

_SAMPLE_LIMIT = 256
_AUTH_REJECTED_STATUS = frozenset({401, 403})


def payload_sample(raw: str, limit: int = _SAMPLE_LIMIT) -> str:
    """Trecho truncado do payload bruto para diagnostico."""
    return raw if len(raw) <= limit else f"{raw[:limit]}..."


def raise_for_upstream_status(response: httpx.Response, *, no_data_on_404: bool) -> None:
    """Classifica status nao-2xx que nao sao retentaveis."""
    status_code = response.status_code
    if 200 <= status_code < 300:
        return
    if status_code in _AUTH_REJECTED_STATUS:
        raise AuthError("upstream_auth_rejected")
    if status_code == 404 and no_data_on_404:
        raise NoDataError("upstream_no_data")
    raise UpstreamError(
        f"upstream_unexpected_status_{status_code}",
        payload_sample=payload_sample(response.text),
    )


def decode_json(response: httpx.Response) -> dict[str, Any]:
    """Decodifica o corpo como objeto JSON ou falha com UpstreamError."""
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise UpstreamError(
            "upstream_invalid_json",
            payload_sample=payload_sample(response.text),
        ) from exc
    if not isinstance(payload, dict):
        raise UpstreamError(
            "upstream_expected_object",
            payload_sample=payload_sample(response.text),
        )
    return payload


def parse_session(payload: dict[str, Any], cookies: dict[str, str]) -> UpstreamSession:
    session_id = payload.get("session_id")
    if not isinstance(session_id, str) or not session_id.strip():
        raise UpstreamError(
            "upstream_missing_session_id",
            payload_sample=payload_sample(json.dumps(payload, default=str)),
        )
    return UpstreamSession(
        session_id=session_id.strip(),
        cookies=tuple(sorted(cookies.items())),
    )


def parse_segment(payload: dict[str, Any], page_token: str) -> RawCalendarSegment:
    """Converte uma pagina do upstream em RawCalendarSegment.

    `available: false` sinaliza mes fora da janela de retencao.
    """
    if payload.get("available") is False:
        raise NoDataError("upstream_month_unavailable")

    events = payload.get("events", [])
    if not isinstance(events, list):
        raise UpstreamError(
            "upstream_events_not_list",
            payload_sample=payload_sample(json.dumps(payload, default=str)),
        )

    try:
        records = tuple(RawCalendarRecord.model_validate(item) for item in events)
    except ValidationError as exc:
        raise UpstreamError(
            "upstream_invalid_record",
            payload_sample=payload_sample(json.dumps(events, default=str)),
        ) from exc

    next_page_token = payload.get("next_page_token")
    if next_page_token is not None and not isinstance(next_page_token, str):
        raise UpstreamError(
            "upstream_invalid_page_token",
            payload_sample=payload_sample(json.dumps(payload, default=str)),
        )

    return RawCalendarSegment(
        records=records,
        page_token=page_token,
        next_page_token=next_page_token or None,
    )
