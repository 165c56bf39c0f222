"""Testes do normalizer puro de segmentos."""

from __future__ import annotations

import pytest

from app.domain.calendar import RawCalendarRecord, RawCalendarSegment, TargetMonth
from app.services.response_normalizer import (
    SUCCESS_MESSAGE,
    failure_response,
    normalize,
    stable_event_id,
)

TARGET = TargetMonth(2025, 10, "Asia/Kolkata")


def _segment(*records: dict, next_page_token: str | None = None) -> RawCalendarSegment:
    return RawCalendarSegment(
        records=tuple(RawCalendarRecord.model_validate(r) for r in records),
        next_page_token=next_page_token,
    )


class TestNormalize:
    def test_success_fields(self) -> None:
        response = normalize([_segment({"id": "a", "date": "2025-10-03", "title": "Holiday"})], TARGET)

        assert response.error is False
        assert response.status == 200
        assert response.message == SUCCESS_MESSAGE
        assert len(response.calendar) == 1

    def test_no_segments_is_empty_success(self) -> None:
        response = normalize([], TARGET)

        assert response.error is False
        assert response.calendar == []

    def test_sorts_by_date_then_start_time(self) -> None:
        response = normalize(
            [
                _segment(
                    {"id": "late", "date": "2025-10-02", "start_time": "15:00"},
                    {"id": "first", "date": "2025-10-01"},
                    {"id": "early", "date": "2025-10-02", "start_time": "09:00"},
                )
            ],
            TARGET,
        )

        assert [e.id for e in response.calendar] == ["first", "early", "late"]

    def test_dedupes_first_occurrence_wins(self) -> None:
        response = normalize(
            [
                _segment({"id": "x", "date": "2025-10-09", "title": "Original"}),
                _segment({"id": "x", "date": "2025-10-09", "title": "Repeat"}),
            ],
            TARGET,
        )

        assert len(response.calendar) == 1
        assert response.calendar[0].event == "Original"

    def test_dedupes_records_without_upstream_id(self) -> None:
        record = {"date": "2025-10-09", "title": "Exam"}
        response = normalize([_segment(record), _segment(record)], TARGET)

        assert len(response.calendar) == 1

    def test_drops_records_outside_target_month(self) -> None:
        response = normalize(
            [
                _segment(
                    {"id": "sep", "date": "2025-09-30"},
                    {"id": "oct", "date": "2025-10-31"},
                    {"id": "nov", "date": "2025-11-01"},
                )
            ],
            TARGET,
        )

        assert [e.id for e in response.calendar] == ["oct"]

    def test_fills_weekday_and_cleans_placeholders(self) -> None:
        response = normalize(
            [_segment({"id": "a", "date": "2025-10-01", "day_order": "-", "title": " Start "})],
            TARGET,
        )

        entry = response.calendar[0]
        assert entry.day == "Wednesday"
        assert entry.day_order is None
        assert entry.event == "Start"

    def test_keeps_upstream_weekday(self) -> None:
        response = normalize([_segment({"id": "a", "date": "2025-10-01", "day": "Wed"})], TARGET)

        assert response.calendar[0].day == "Wed"

    def test_is_idempotent(self) -> None:
        segments = [
            _segment({"id": "b", "date": "2025-10-02"}, {"date": "2025-10-01", "title": "x"}),
            _segment({"id": "b", "date": "2025-10-02"}),
        ]

        first = normalize(segments, TARGET)
        second = normalize(segments, TARGET)

        assert first.model_dump_json() == second.model_dump_json()


class TestStableEventId:
    def test_prefers_upstream_id(self) -> None:
        record = RawCalendarRecord(id=" 42 ", date="2025-10-01")
        assert stable_event_id(record) == "42"

    def test_numeric_upstream_id_is_coerced(self) -> None:
        record = RawCalendarRecord.model_validate({"id": 42, "date": "2025-10-01"})
        assert stable_event_id(record) == "42"

    def test_hash_is_deterministic(self) -> None:
        a = RawCalendarRecord(date="2025-10-01", title="Exam")
        b = RawCalendarRecord(date="2025-10-01", title="Exam")
        c = RawCalendarRecord(date="2025-10-01", title="Other")

        assert stable_event_id(a) == stable_event_id(b)
        assert stable_event_id(a) != stable_event_id(c)


class TestFailureResponse:
    @pytest.mark.parametrize("status", [401, 404, 502, 504])
    def test_failure_shape(self, status: int) -> None:
        response = failure_response(status, "boom")

        assert response.error is True
        assert response.status == status
        assert response.calendar == []
        assert set(response.model_dump()) == {"error", "message", "status", "calendar"}
