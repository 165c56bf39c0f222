"""Testes abrangentes para config.logging.

Cobre: configure_logging, get_logger, log_fetch_failure,
CorrelationIdFilter, SensitiveFieldFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    SensitiveFieldFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fetch_failure,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS
from config.logging.filters import REDACTED


def _record(msg: str = "msg", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_configure_logging_levels(self, level: str, expected: int) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_configure_logging_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nivel de log invalido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_filters(self) -> None:
        configure_logging(correlation_id_getter=lambda: "custom-corr-id")
        filters = logging.getLogger().handlers[0].filters
        assert any(isinstance(f, CorrelationIdFilter) for f in filters)
        assert any(isinstance(f, SensitiveFieldFilter) for f in filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "calendar_scraper"


class TestGetLogger:
    """Testes para get_logger."""

    def test_get_logger_returns_same_instance(self) -> None:
        logger = get_logger("same.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "same.module"
        assert get_logger("same.module") is logger


class TestLogFetchFailure:
    """Testes para log_fetch_failure."""

    def test_client_errors_log_as_warning(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fetch_failure(logger, "upstream_auth_rejected", 401, target="2026-10")

        level, message = logger.log.call_args[0]
        extra = logger.log.call_args[1]["extra"]
        assert level == logging.WARNING
        assert message == "calendar_fetch_failed"
        assert extra == {
            "error_code": "upstream_auth_rejected",
            "status": 401,
            "partial_segments": 0,
            "target": "2026-10",
        }

    def test_server_errors_log_as_error_with_timing(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fetch_failure(
            logger,
            "pagination_limit_exceeded",
            502,
            elapsed_ms=12.3456,
            partial_segments=3,
        )

        level = logger.log.call_args[0][0]
        extra = logger.log.call_args[1]["extra"]
        assert level == logging.ERROR
        assert extra["elapsed_ms"] == 12.35
        assert extra["partial_segments"] == 3
        assert "target" not in extra


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("my_service", lambda: "corr-123")
        record = _record()
        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"
        filter_.filter(record)
        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        filter_ = CorrelationIdFilter("service_name", None)
        record = _record()
        filter_.filter(record)
        assert record.correlation_id == ""


class TestSensitiveFieldFilter:
    """Credenciais e ids de sessao nunca chegam ao formatter."""

    @pytest.mark.parametrize("field_name", ["token", "authorization", "session_id", "cookie"])
    def test_sensitive_extras_are_redacted(self, field_name: str) -> None:
        record = _record()
        setattr(record, field_name, "super-secret")
        assert SensitiveFieldFilter().filter(record) is True
        assert getattr(record, field_name) == REDACTED

    def test_other_fields_untouched(self) -> None:
        record = _record()
        record.status = 502
        SensitiveFieldFilter().filter(record)
        assert record.status == 502
        assert not hasattr(record, "token")

    def test_redaction_reaches_json_output(self) -> None:
        record = _record("upstream_call_failed")
        record.token = "abc.def"
        record.correlation_id = "c-1"
        record.service = "svc"
        SensitiveFieldFilter().filter(record)

        output = create_json_formatter().format(record)

        assert "abc.def" not in output
        assert json.loads(output)["token"] == REDACTED


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_required_log_fields_content(self) -> None:
        expected = {"asctime", "levelname", "name", "message", "correlation_id", "service"}
        assert expected == set(REQUIRED_LOG_FIELDS)

    def test_field_rename_map_content(self) -> None:
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_create_json_formatter_returns_formatter(self) -> None:
        from pythonjsonlogger.json import JsonFormatter

        assert isinstance(create_json_formatter(), JsonFormatter)

    def test_json_formatter_formats_record(self) -> None:
        record = _record("calendar_fetch_completed")
        record.name = "test.logger"
        record.correlation_id = "abc-123"
        record.service = "test_service"
        record.entries = 3

        payload = json.loads(create_json_formatter().format(record))

        assert payload["message"] == "calendar_fetch_completed"
        assert payload["logger"] == "test.logger"
        assert payload["level"] == "INFO"
        assert payload["correlation_id"] == "abc-123"
        assert payload["entries"] == 3


class TestLoggingIntegration:
    """Testes de integracao do sistema de logging."""

    def test_full_logging_flow(self) -> None:
        configure_logging(
            level="DEBUG",
            service_name="integration_test",
            correlation_id_getter=lambda: "int-test-001",
        )
        logger = get_logger("integration.test")
        # Nao deve levantar excecao
        logger.debug("calendar_handler_triggered", extra={"token_length": 12})
        logger.info("calendar_fetch_completed", extra={"token": "never-logged"})
        logger.warning("upstream_retry")
        logger.error("calendar_fetch_failed")
