"""Shared pytest fixtures for otel-console tests.

Telemetry is always built with in-memory exporters and private providers,
and HTTP goes through ``httpx.MockTransport``, so nothing leaves the process.
"""

import logging
from typing import Generator

import httpx
import pytest
import structlog
from opentelemetry.sdk.metrics.export import InMemoryMetricReader
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from otel_console.core.settings import Settings, get_settings
from otel_console.observability.telemetry import Telemetry, configure_telemetry
from tests._support import InMemoryLogRecordExporter, RecordingHandler


@pytest.fixture(autouse=True)
def isolate_logging() -> Generator[None, None, None]:
    """Undo structlog configuration and root handlers added by a test."""
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    logging.root.handlers = handlers
    logging.root.setLevel(level)
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        trace_exporters=[],
        metric_exporters=[],
        log_exporters=[],
        wait_for_exit=False,
    )


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def metric_reader() -> InMemoryMetricReader:
    return InMemoryMetricReader()


@pytest.fixture
def log_exporter() -> InMemoryLogRecordExporter:
    return InMemoryLogRecordExporter()


@pytest.fixture
def telemetry(settings, span_exporter, metric_reader, log_exporter) -> Generator[Telemetry, None, None]:
    telemetry = configure_telemetry(
        settings,
        span_exporters=[span_exporter],
        metric_readers=[metric_reader],
        log_exporters=[log_exporter],
        attach_log_handler=False,
    )
    yield telemetry
    telemetry.shutdown()


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
