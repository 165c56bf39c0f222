"""Modelos de dominio da busca mensal de calendario.

Os contratos ficam no dominio para que fetcher, normalizer e client
compartilhem os mesmos tipos sem depender do formato do upstream.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_type
from datetime import datetime
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


@dataclass(frozen=True, slots=True)
class TargetMonth:
    """Mes alvo normalizado para o primeiro instante no timezone de referencia.

    Attributes:
        year: Ano (1..9999)
        month: Mes (1..12)
        timezone: Nome IANA do timezone de referencia
    """

    year: int
    month: int
    timezone: str = "UTC"

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month deve estar entre 1 e 12, recebido: {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"year fora do intervalo suportado: {self.year}")

    @classmethod
    def current(cls, timezone: str, now: datetime | None = None) -> TargetMonth:
        """Resolve o mes corrente no timezone informado."""
        zone = ZoneInfo(timezone)
        moment = now.astimezone(zone) if now is not None else datetime.now(zone)
        return cls(year=moment.year, month=moment.month, timezone=timezone)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def start(self) -> datetime:
        """Primeiro instante do mes (dia sempre 1)."""
        return datetime(self.year, self.month, 1, tzinfo=self.zone)

    @property
    def end(self) -> datetime:
        """Primeiro instante do mes seguinte (limite exclusivo)."""
        if self.month == 12:
            return datetime(self.year + 1, 1, 1, tzinfo=self.zone)
        return datetime(self.year, self.month + 1, 1, tzinfo=self.zone)

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def contains(self, value: datetime) -> bool:
        return self.start <= value < self.end


class RawCalendarRecord(BaseModel):
    """Registro de evento como devolvido pelo upstream."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str | None = Field(default=None, description="Identificador do registro no upstream.")
    date: str = Field(..., min_length=1, description="Data do evento (YYYY-MM-DD).")
    title: str = Field(default="", description="Titulo/descricao do evento.")
    day: str | None = Field(default=None, description="Dia da semana informado pelo upstream.")
    day_order: str | None = Field(default=None, description="Day order academico, se houver.")
    start_time: str | None = Field(default=None, description="Horario de inicio (HH:MM).")
    end_time: str | None = Field(default=None, description="Horario de fim (HH:MM).")

    @field_validator("date")
    @classmethod
    def _iso_date(cls, value: str) -> str:
        text = value.strip()
        # Aceita data pura ou datetime ISO; so os 10 primeiros chars contam.
        date_type.fromisoformat(text[:10])
        return text


@dataclass(frozen=True, slots=True)
class UpstreamSession:
    """Handle autenticado de uma sessao com o upstream.

    Request-local: nasce no handshake e morre com a busca.
    """

    session_id: str
    cookies: tuple[tuple[str, str], ...] = ()

    def cookie_dict(self) -> dict[str, str]:
        return dict(self.cookies)


@dataclass(frozen=True, slots=True)
class RawCalendarSegment:
    """Uma pagina de dados produzida por uma unica chamada ao upstream.

    Vive apenas durante a requisicao; e descartada apos a normalizacao.
    """

    records: tuple[RawCalendarRecord, ...]
    page_token: str = ""
    next_page_token: str | None = None

    @property
    def is_last(self) -> bool:
        return not self.next_page_token


class CalendarEntry(BaseModel):
    """Entrada normalizada do calendario dentro do mes alvo."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Identificador estavel do evento.")
    date: str = Field(..., description="Data ISO (YYYY-MM-DD).")
    day: str = Field(..., description="Dia da semana.")
    event: str = Field(default="", description="Titulo do evento.")
    day_order: str | None = Field(default=None, description="Day order academico.")
    start_time: str | None = Field(default=None, description="Horario de inicio.")
    end_time: str | None = Field(default=None, description="Horario de fim.")


class CalendarResponse(BaseModel):
    """Resultado externo da busca, identico em forma no sucesso e na falha."""

    model_config = ConfigDict(extra="ignore")

    error: bool = Field(..., description="Indica falha da busca.")
    message: str = Field(..., description="Mensagem legivel para o usuario.")
    status: int = Field(..., description="Status no estilo HTTP.")
    calendar: list[CalendarEntry] = Field(
        default_factory=list,
        description="Entradas do mes em ordem cronologica.",
    )

    @model_validator(mode="after")
    def _failure_has_no_calendar(self) -> CalendarResponse:
        # Resultado parcial nunca e exposto junto com erro.
        if self.error and self.calendar:
            raise ValueError("calendar deve ser vazio quando error=True")
        return self


__all__ = [
    "CalendarEntry",
    "CalendarResponse",
    "RawCalendarRecord",
    "RawCalendarSegment",
    "TargetMonth",
    "UpstreamSession",
]
