"""Process-wide telemetry bundle: tracer, meter, logger provider and counter."""

from dataclasses import dataclass, field

from opentelemetry import metrics, trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.metrics import Counter, Meter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import LogExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SpanExporter
from opentelemetry.trace import Tracer

from otel_console.core.settings import Settings, get_settings
from otel_console.observability.logging import (
    attach_otel_handler,
    build_logger_provider,
    detach_otel_handler,
    get_logger,
)
from otel_console.observability.metrics import build_meter_provider, create_request_counter
from otel_console.observability.tracing import build_resource, build_tracer_provider

logger = get_logger(__name__)


@dataclass
class Telemetry:
    """Providers and instruments shared by everything that emits telemetry."""

    settings: Settings
    tracer_provider: TracerProvider
    meter_provider: MeterProvider
    logger_provider: LoggerProvider
    tracer: Tracer
    meter: Meter
    request_counter: Counter
    log_handler: LoggingHandler | None = None
    _shut_down: bool = field(default=False, repr=False)

    def shutdown(self) -> None:
        """Flush and close every provider. Safe to call more than once."""
        if self._shut_down:
            return
        self._shut_down = True

        # Each step runs even if an earlier provider fails to shut down
        try:
            self.tracer_provider.shutdown()
        finally:
            try:
                self.meter_provider.shutdown()
            finally:
                try:
                    if self.log_handler is not None:
                        detach_otel_handler(self.log_handler)
                finally:
                    self.logger_provider.shutdown()


def configure_telemetry(
    settings: Settings | None = None,
    *,
    span_exporters: list[SpanExporter] | None = None,
    metric_readers: list[MetricReader] | None = None,
    log_exporters: list[LogExporter] | None = None,
    attach_log_handler: bool = True,
    install_globals: bool = False,
) -> Telemetry:
    """Build the tracer, meter and logger providers for this process.

    Args:
        settings: Application settings (defaults to ``get_settings()``).
        span_exporters: Replace the configured trace exporters.
        metric_readers: Replace the configured metric readers.
        log_exporters: Replace the configured log exporters.
        attach_log_handler: Route stdlib/structlog records into OTel logs.
        install_globals: Register the providers as the OpenTelemetry globals.
            The CLI does this; tests keep their providers private.
    """
    settings = settings or get_settings()
    resource = build_resource(settings)

    tracer_provider = build_tracer_provider(settings, resource, span_exporters)
    meter_provider = build_meter_provider(settings, resource, metric_readers)
    logger_provider = build_logger_provider(settings, resource, log_exporters)

    if install_globals:
        trace.set_tracer_provider(tracer_provider)
        metrics.set_meter_provider(meter_provider)
        set_logger_provider(logger_provider)

    tracer = tracer_provider.get_tracer(settings.app_name, settings.app_version)
    meter = meter_provider.get_meter(settings.app_name, settings.app_version)

    log_handler = attach_otel_handler(logger_provider) if attach_log_handler else None

    logger.debug(
        "Telemetry configured",
        trace_exporters=settings.trace_exporters if span_exporters is None else "custom",
        metric_exporters=settings.metric_exporters if metric_readers is None else "custom",
    )

    return Telemetry(
        settings=settings,
        tracer_provider=tracer_provider,
        meter_provider=meter_provider,
        logger_provider=logger_provider,
        tracer=tracer,
        meter=meter,
        request_counter=create_request_counter(meter, settings),
        log_handler=log_handler,
    )
