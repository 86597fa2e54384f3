"""Structured logging with structlog, bridged into OpenTelemetry logs."""

import copy
import logging
import sys
from functools import lru_cache
from typing import Any

import structlog
from opentelemetry import trace
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import (
    BatchLogRecordProcessor,
    ConsoleLogExporter,
    LogExporter,
    SimpleLogRecordProcessor,
)
from opentelemetry.sdk.resources import Resource
from structlog.types import EventDict

from otel_console.core.settings import Settings, get_settings

# Added to stdlib records by ProcessorFormatter.wrap_for_formatter
_STRUCTLOG_EXTRAS = ("_logger", "_name", "_from_structlog", "_record")
_PRIMITIVES = (str, bool, int, float)


def add_trace_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Attach the active span's trace and span ids to the event."""
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the application."""
    settings = settings or get_settings()

    # Stdout is reserved for the response body and the console exporters
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper()),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_trace_context,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if settings.log_format == "json":
        formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
        )
    else:
        formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
        )

    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


class StructlogOTelHandler(LoggingHandler):
    """LoggingHandler that understands records produced by structlog.

    structlog hands the stdlib logger its event dict as ``record.msg``. The
    event name becomes the OTel log body and the remaining primitive fields
    become log attributes. The record is copied so handlers running after
    this one still see the original.
    """

    def emit(self, record: logging.LogRecord) -> None:
        record = copy.copy(record)
        for attr in _STRUCTLOG_EXTRAS:
            record.__dict__.pop(attr, None)

        if isinstance(record.msg, dict):
            event = dict(record.msg)
            record.msg = str(event.pop("event", ""))
            record.args = ()
            for key, value in event.items():
                if isinstance(value, _PRIMITIVES) and key not in record.__dict__:
                    record.__dict__[key] = value

        super().emit(record)


def build_logger_provider(
    settings: Settings,
    resource: Resource,
    exporters: list[LogExporter] | None = None,
) -> LoggerProvider:
    """Create a LoggerProvider exporting to the configured log sinks.

    Explicit ``exporters`` replace the ones named in ``settings.log_exporters``.
    Console export is synchronous; OTLP export is batched.
    """
    provider = LoggerProvider(resource=resource)

    if exporters is not None:
        for exporter in exporters:
            provider.add_log_record_processor(SimpleLogRecordProcessor(exporter))
        return provider

    for name in settings.log_exporters:
        if name == "console":
            provider.add_log_record_processor(SimpleLogRecordProcessor(ConsoleLogExporter()))
        elif name == "otlp":
            from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter

            provider.add_log_record_processor(
                BatchLogRecordProcessor(
                    OTLPLogExporter(endpoint=settings.otlp_endpoint, insecure=settings.otlp_insecure)
                )
            )

    return provider


def attach_otel_handler(provider: LoggerProvider, level: int = logging.NOTSET) -> LoggingHandler:
    """Route stdlib (and therefore structlog) records into ``provider``."""
    handler = StructlogOTelHandler(level=level, logger_provider=provider)
    logging.getLogger().addHandler(handler)
    return handler


def detach_otel_handler(handler: LoggingHandler) -> None:
    logging.getLogger().removeHandler(handler)


@lru_cache(maxsize=100)
def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """Bind context variables for structured logging."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear context variables."""
    structlog.contextvars.clear_contextvars()
