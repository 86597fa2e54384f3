"""Observability - logging, metrics, tracing."""

from otel_console.observability.enrichment import (
    REQUEST_HEADER_PREFIX,
    RESPONSE_HEADER_PREFIX,
    async_enrich_request,
    async_enrich_response,
    enrich_request,
    enrich_response,
)
from otel_console.observability.logging import configure_logging, get_logger
from otel_console.observability.telemetry import Telemetry, configure_telemetry

__all__ = [
    "REQUEST_HEADER_PREFIX",
    "RESPONSE_HEADER_PREFIX",
    "Telemetry",
    "async_enrich_request",
    "async_enrich_response",
    "configure_logging",
    "configure_telemetry",
    "enrich_request",
    "enrich_response",
    "get_logger",
]
