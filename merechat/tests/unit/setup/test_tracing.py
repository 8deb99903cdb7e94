"""Tracing Setup Unit Tests."""

import logging
from unittest.mock import MagicMock

import pytest

from merechat.setup import tracing


@pytest.fixture
def service_record_factory():
    """setup_logging과 같이 record.service를 채우는 factory 설치."""
    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = old_factory(*args, **kwargs)
        record.service = {"name": "merechat-api"}
        return record

    logging.setLogRecordFactory(record_factory)
    yield
    logging.setLogRecordFactory(old_factory)


class TestConfigureTracing:
    """configure_tracing 테스트."""

    def test_disabled_by_default(self, monkeypatch) -> None:
        monkeypatch.setattr(tracing, "OTEL_ENABLED", False)

        assert tracing.configure_tracing() is False

    def test_enabled_with_service_logging(
        self, monkeypatch, caplog, service_record_factory
    ) -> None:
        set_provider = MagicMock()
        monkeypatch.setattr(tracing, "OTEL_ENABLED", True)
        monkeypatch.setattr("opentelemetry.trace.set_tracer_provider", set_provider)
        caplog.set_level(logging.INFO, logger=tracing.__name__)

        try:
            assert tracing.configure_tracing() is True
        finally:
            tracing.shutdown_tracing()

        set_provider.assert_called_once()
        (record,) = [
            r for r in caplog.records if r.getMessage() == "OpenTelemetry tracing configured"
        ]
        assert record.service_name == tracing.SERVICE_NAME
        assert record.service == {"name": "merechat-api"}
