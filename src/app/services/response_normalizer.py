"""Normalizacao dos segmentos agregados em CalendarResponse.

Funcao pura: sem IO, sem relogio, deterministica dado o input.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from datetime import date

from app.domain.calendar import (
    CalendarEntry,
    CalendarResponse,
    RawCalendarRecord,
    RawCalendarSegment,
    TargetMonth,
)

SUCCESS_MESSAGE = "Calendar fetched successfully"

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def normalize(segments: Iterable[RawCalendarSegment], target: TargetMonth) -> CalendarResponse:
    """Converte os segmentos em resposta de sucesso.

    Registros fora do mes alvo sao descartados; duplicados (mesmo id
    estavel) mantem a primeira ocorrencia. Ordem final: data, horario
    de inicio, id.
    """
    entries: dict[str, CalendarEntry] = {}
    for segment in segments:
        for record in segment.records:
            day = _record_date(record)
            if (day.year, day.month) != (target.year, target.month):
                continue
            entry = _to_entry(record, day)
            entries.setdefault(entry.id, entry)

    ordered = sorted(entries.values(), key=lambda e: (e.date, e.start_time or "", e.id))
    return CalendarResponse(error=False, message=SUCCESS_MESSAGE, status=200, calendar=ordered)


def failure_response(status: int, message: str) -> CalendarResponse:
    """Resposta de falha: mesma forma do sucesso, calendar sempre vazio."""
    return CalendarResponse(error=True, message=message, status=status, calendar=[])


def stable_event_id(record: RawCalendarRecord) -> str:
    """Id do upstream quando existe; senao hash de data, titulo e horario."""
    if record.id and record.id.strip():
        return record.id.strip()
    fingerprint = "|".join((record.date.strip(), record.title.strip(), record.start_time or ""))
    return hashlib.sha256(fingerprint.encode("utf-8")).hexdigest()[:16]


def _to_entry(record: RawCalendarRecord, day: date) -> CalendarEntry:
    return CalendarEntry(
        id=stable_event_id(record),
        date=day.isoformat(),
        day=(record.day or "").strip() or _WEEKDAYS[day.weekday()],
        event=record.title.strip(),
        day_order=_clean(record.day_order),
        start_time=_clean(record.start_time),
        end_time=_clean(record.end_time),
    )


def _record_date(record: RawCalendarRecord) -> date:
    # RawCalendarRecord ja garante prefixo ISO valido.
    return date.fromisoformat(record.date[:10])


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    # "-" e o marcador de dia sem day order no upstream.
    return stripped if stripped and stripped != "-" else None
